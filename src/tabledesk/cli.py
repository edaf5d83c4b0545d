"""CLI entrypoint for tabledesk."""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Sequence

from tabledesk.api.export import write_export
from tabledesk.api.view_api import page_count
from tabledesk.config.loader import load_config
from tabledesk.table.column_registry import DuplicateColumnError
from tabledesk.table.editing import RowValidationError
from tabledesk.table.models import ColumnDef, Row, ViewQuery, cell_text
from tabledesk.utils.logging import get_logger
from tabledesk.workspace import Workspace

logger = get_logger(__name__)


def _load_workspace(args: argparse.Namespace) -> Workspace:
    config = load_config(getattr(args, "config", None))
    return Workspace.from_config(config)


def _apply_view_args(workspace: Workspace, args: argparse.Namespace) -> None:
    """Fold --search/--sort/--desc/--page/--page-size into the workspace query."""
    update = {}
    if getattr(args, "search", None):
        update["search_text"] = args.search
    if getattr(args, "sort", None):
        update["sort_key"] = args.sort
        update["sort_direction"] = "desc" if args.desc else "asc"
    if getattr(args, "page", None) is not None:
        update["page_index"] = max(args.page - 1, 0)
    if getattr(args, "page_size", None) is not None:
        update["page_size"] = args.page_size
    workspace.query = ViewQuery.model_validate({**workspace.query.model_dump(), **update})


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def _parse_assignments(pairs: Sequence[str]) -> Dict[str, str]:
    changes: Dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected FIELD=VALUE, got: {pair}")
        key, value = pair.split("=", 1)
        if not key.strip():
            raise ValueError(f"Missing field name in: {pair}")
        changes[key.strip()] = value
    return changes


def render_table(rows: Sequence[Row], columns: Sequence[ColumnDef]) -> str:
    """Plain-text grid of the visible columns, id first."""
    headers = ["id"] + [c.label for c in columns]
    keys = ["id"] + [c.key for c in columns]
    body = [[cell_text(row.get(key)) or "" for key in keys] for row in rows]
    widths = [max(len(line[i]) for line in [headers] + body) for i in range(len(headers))]

    def fmt(cells: List[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [fmt(headers), fmt(["-" * w for w in widths])]
    lines.extend(fmt(cells) for cells in body)
    return "\n".join(lines)


def cmd_view(args: argparse.Namespace) -> None:
    """Print one page of the table."""
    workspace = _load_workspace(args)
    _apply_view_args(workspace, args)
    result = workspace.view()
    print(render_table(result.items, workspace.columns.visible_columns()))
    pages = page_count(result.total_count, workspace.query.page_size)
    print(f"\nPage {workspace.query.page_index + 1} of {max(pages, 1)} ({result.total_count} rows)")


def cmd_import(args: argparse.Namespace) -> None:
    """Replace all rows with the contents of a CSV file."""
    workspace = _load_workspace(args)
    result = workspace.import_csv_file(args.file, keep_blank_ids=args.keep_blank_ids)
    if result.complete:
        print(f"Imported {len(result.rows)} rows from {args.file}")
    else:
        print(f"Import of {args.file} aborted; rows unchanged")
    if result.errors:
        print("Import errors:")
        for error in result.errors:
            print(f"  - {error}")


def cmd_export(args: argparse.Namespace) -> None:
    """Export matching rows (all pages, visible columns) as CSV."""
    workspace = _load_workspace(args)
    _apply_view_args(workspace, args)
    payload = workspace.export()
    if args.out:
        print(write_export(payload, args.out))
    else:
        sys.stdout.write(payload.content)


def cmd_rows_delete(args: argparse.Namespace) -> None:
    workspace = _load_workspace(args)
    before = len(workspace.rows)
    workspace.delete_row(args.row_id)
    if len(workspace.rows) < before:
        print(f"Deleted row {args.row_id}")
    else:
        print(f"No row with id {args.row_id}")


def cmd_rows_edit(args: argparse.Namespace) -> None:
    workspace = _load_workspace(args)
    changes = _parse_assignments(args.assignments)
    try:
        workspace.edit_row(args.row_id, changes)
    except KeyError:
        print(f"[tabledesk] No row with id {args.row_id}", file=sys.stderr)
        raise SystemExit(1)
    except RowValidationError as e:
        print(f"[tabledesk] Edit rejected: {e}", file=sys.stderr)
        raise SystemExit(1)
    print(f"Updated row {args.row_id}")


def cmd_columns_list(args: argparse.Namespace) -> None:
    workspace = _load_workspace(args)
    for position, column in enumerate(workspace.columns.columns):
        mark = "x" if column.visible else " "
        print(f"{position:>2} [{mark}] {column.key} ({column.label})")


def cmd_columns_toggle(args: argparse.Namespace) -> None:
    workspace = _load_workspace(args)
    workspace.columns.toggle_visibility(args.key)
    column = workspace.columns.get(args.key)
    if column is None:
        print(f"No column with key {args.key}")
    else:
        print(f"{column.key}: {'visible' if column.visible else 'hidden'}")


def cmd_columns_add(args: argparse.Namespace) -> None:
    workspace = _load_workspace(args)
    try:
        columns = workspace.add_column(args.label)
    except DuplicateColumnError as e:
        print(f"[tabledesk] {e}", file=sys.stderr)
        raise SystemExit(1)
    print(f"Added column {columns[-1].key}")


def cmd_columns_move(args: argparse.Namespace) -> None:
    workspace = _load_workspace(args)
    columns = workspace.move_column(args.from_index, args.to_index)
    print("Column order: " + ", ".join(c.key for c in columns))


def cmd_seed(args: argparse.Namespace) -> None:
    """Replace all rows with the remote seed data."""
    workspace = _load_workspace(args)
    if workspace.seed_from_remote():
        print(f"Seeded {len(workspace.rows)} rows")
    else:
        print("Seed fetch skipped or failed; rows unchanged")


def _add_view_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--search", type=str, help="Case-insensitive text matched against every field")
    parser.add_argument("--sort", type=str, help="Field key to sort by")
    parser.add_argument("--desc", action="store_true", help="Sort descending (with --sort)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabledesk",
        description="Persisted, editable record table with CSV import/export",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file path (default: tabledesk.config.yaml if present)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # view command
    view_parser = subparsers.add_parser("view", help="Show one page of the table")
    _add_view_arguments(view_parser)
    view_parser.add_argument("--page", type=_positive_int, default=1, help="1-based page number (default: 1)")
    view_parser.add_argument("--page-size", type=_positive_int, help="Rows per page (default: from config)")
    view_parser.set_defaults(func=cmd_view)

    # import command
    import_parser = subparsers.add_parser("import", help="Replace all rows from a CSV file")
    import_parser.add_argument("file", type=Path, help="CSV file with a header line")
    import_parser.add_argument(
        "--keep-blank-ids",
        action="store_true",
        help="Let an empty id cell overwrite the generated id",
    )
    import_parser.set_defaults(func=cmd_import)

    # export command
    export_parser = subparsers.add_parser("export", help="Export matching rows as CSV")
    _add_view_arguments(export_parser)
    export_parser.add_argument(
        "--out",
        type=Path,
        help="Output file or directory (if not provided, prints to stdout)",
    )
    export_parser.set_defaults(func=cmd_export)

    # rows commands
    rows_parser = subparsers.add_parser("rows", help="Row commands")
    rows_subparsers = rows_parser.add_subparsers(dest="rows_subcommand", help="Row subcommands", required=True)
    rows_delete_parser = rows_subparsers.add_parser("delete", help="Delete a row by id")
    rows_delete_parser.add_argument("row_id", help="Row id")
    rows_delete_parser.set_defaults(func=cmd_rows_delete)
    rows_edit_parser = rows_subparsers.add_parser("edit", help="Edit fields of a row")
    rows_edit_parser.add_argument("row_id", help="Row id")
    rows_edit_parser.add_argument("assignments", nargs="+", help="FIELD=VALUE pairs")
    rows_edit_parser.set_defaults(func=cmd_rows_edit)

    # columns commands
    columns_parser = subparsers.add_parser("columns", help="Column commands")
    columns_subparsers = columns_parser.add_subparsers(
        dest="columns_subcommand",
        help="Column subcommands",
        required=True,
    )
    columns_list_parser = columns_subparsers.add_parser("list", help="List columns in display order")
    columns_list_parser.set_defaults(func=cmd_columns_list)
    columns_toggle_parser = columns_subparsers.add_parser("toggle", help="Show/hide a column")
    columns_toggle_parser.add_argument("key", help="Column key")
    columns_toggle_parser.set_defaults(func=cmd_columns_toggle)
    columns_add_parser = columns_subparsers.add_parser("add", help="Add a column from a label")
    columns_add_parser.add_argument("label", help="Column label; the key is derived from it")
    columns_add_parser.set_defaults(func=cmd_columns_add)
    columns_move_parser = columns_subparsers.add_parser("move", help="Move a column to a new position")
    columns_move_parser.add_argument("from_index", type=int, help="Current 0-based position")
    columns_move_parser.add_argument("to_index", type=int, help="New 0-based position")
    columns_move_parser.set_defaults(func=cmd_columns_move)

    # seed command
    seed_parser = subparsers.add_parser("seed", help="Replace rows with remote seed data")
    seed_parser.set_defaults(func=cmd_seed)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except SystemExit:
        raise
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
