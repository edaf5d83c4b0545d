"""Workspace: one user's table session wired together explicitly.

Holds the row store, the column registry, the transient view query and the
pending row edit. Nothing here is a module-level singleton; callers build a
Workspace and pass it around.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from tabledesk.api.export import EXPORT_FILENAME, ExportPayload, export_rows
from tabledesk.api.import_api import import_csv_file, import_csv_text
from tabledesk.api.view_api import compute_view, toggle_sort, with_search
from tabledesk.persistence.kv_store import KeyValueStore, SqliteKeyValueStore
from tabledesk.retrieval.seed_fetcher import SeedFetcher, SeedFetchError
from tabledesk.table.column_registry import ColumnRegistry, column_key_from_label, move_column
from tabledesk.table.editing import RowEditor
from tabledesk.table.models import ColumnDef, ParseResult, Row, ViewQuery, ViewResult
from tabledesk.table.row_store import RowStore
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)


class Workspace:
    def __init__(
        self,
        kv: KeyValueStore,
        *,
        page_size: int = 5,
        seed_fetcher: Optional[SeedFetcher] = None,
        export_filename: str = EXPORT_FILENAME,
    ):
        self.rows = RowStore.load(kv)
        self.columns = ColumnRegistry.load(kv)
        self.editor = RowEditor(self.rows)
        self.query = ViewQuery(page_size=page_size)
        self.seed_fetcher = seed_fetcher
        self.export_filename = export_filename
        self.import_errors: List[str] = []

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Workspace":
        seed_cfg = config.get("seed", {})
        fetcher = None
        if seed_cfg.get("enabled", True):
            fetcher = SeedFetcher(
                seed_cfg["url"],
                timeout_seconds=seed_cfg.get("timeout_seconds", 20),
                user_agent=seed_cfg.get("user_agent", "tabledesk/0.1"),
            )
        return cls(
            SqliteKeyValueStore(config["storage"]["sqlite_path"]),
            page_size=config.get("view", {}).get("page_size", 5),
            seed_fetcher=fetcher,
            export_filename=config.get("export", {}).get("filename", EXPORT_FILENAME),
        )

    # view state

    def view(self) -> ViewResult:
        return compute_view(self.rows.rows, self.query)

    def search(self, text: str) -> ViewResult:
        self.query = with_search(self.query, text)
        return self.view()

    def sort_by(self, key: str) -> ViewResult:
        self.query = toggle_sort(self.query, key)
        return self.view()

    def go_to_page(self, page_index: int) -> ViewResult:
        self.query = self.query.model_copy(update={"page_index": max(page_index, 0)})
        return self.view()

    # rows

    def edit_row(self, row_id: str, changes: Mapping[str, Any]) -> List[Row]:
        """
        Apply field changes to one row through the validating editor.

        Raises:
            KeyError: If no row has this id
            RowValidationError: If the edited row is invalid (nothing saved)
        """
        row = self.rows.get(row_id)
        if row is None:
            raise KeyError(f"No row with id {row_id}")
        self.editor.begin(row)
        for key, value in changes.items():
            self.editor.set_field(key, value)
        return self.editor.save()

    def delete_row(self, row_id: str) -> List[Row]:
        return self.rows.delete(row_id)

    def import_csv_text(self, text: str, keep_blank_ids: bool = False) -> ParseResult:
        result = import_csv_text(self.rows, text, keep_blank_ids=keep_blank_ids)
        self.import_errors = list(result.errors)
        return result

    def import_csv_file(self, path: Path, keep_blank_ids: bool = False) -> ParseResult:
        result = import_csv_file(self.rows, path, keep_blank_ids=keep_blank_ids)
        self.import_errors = list(result.errors)
        return result

    def export(self) -> ExportPayload:
        """Export every row matching the current search and sort, visible columns only."""
        return export_rows(self.rows.rows, self.columns.columns, self.query, filename=self.export_filename)

    def seed_from_remote(self) -> bool:
        """
        Replace all rows with the remote seed data.

        A failed fetch is logged and leaves the current rows untouched.

        Returns:
            True if rows were replaced
        """
        if self.seed_fetcher is None:
            logger.debug("Seed fetch disabled")
            return False
        try:
            seed_rows = self.seed_fetcher.fetch()
        except SeedFetchError as e:
            logger.error(f"Failed to fetch users: {e}")
            return False
        self.rows.replace_all(seed_rows)
        return True

    # columns

    def add_column(self, label: str) -> List[ColumnDef]:
        key = column_key_from_label(label)
        return self.columns.add(ColumnDef(key=key, label=label.strip(), visible=True))

    def move_column(self, from_index: int, to_index: int) -> List[ColumnDef]:
        return self.columns.reorder(move_column(self.columns.columns, from_index, to_index))
