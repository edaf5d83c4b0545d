"""CSV interchange: best-effort import with schema reconciliation, and
projected export.

Import never raises on bad content. Problems are collected as
human-readable strings next to the rows, and every data row is kept.
"""

import csv
import io
import sys
from typing import Any, Dict, List, Mapping, Sequence

from tabledesk.table.defaults import DEFAULT_AGE, DEFAULT_ROLE
from tabledesk.table.models import ParseResult, Row, cell_text
from tabledesk.utils.id_generator import new_row_id, next_import_stamp
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "email")

# cells are unbounded; the csv module caps them at 128 KiB by default
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))


def reconcile_row(raw: Mapping[str, str], index: int, stamp: int, keep_blank_ids: bool = False) -> Row:
    """
    Build a complete Row from one parsed CSV record.

    Defaults are computed first and every raw field is then laid over them,
    so a column present in the file wins even when its cell is blank. The
    one exception is a blank ``id``, which keeps the synthesized id unless
    ``keep_blank_ids`` is set.

    Args:
        raw: Header-to-cell mapping for one data row
        index: 0-based data row index (used in synthesized ids)
        stamp: Import timestamp shared by every row of one parse
        keep_blank_ids: Let a blank raw ``id`` erase the synthesized id

    Returns:
        Reconciled row
    """
    synthesized_id = raw.get("id") or new_row_id(index, stamp)
    row: Row = {
        "id": synthesized_id,
        "name": raw.get("name") or "",
        "email": raw.get("email") or "",
        "age": raw.get("age") or DEFAULT_AGE,
        "role": raw.get("role") or DEFAULT_ROLE,
    }
    row.update(raw)
    if not row["id"] and not keep_blank_ids:
        row["id"] = synthesized_id
    return row


def parse_csv(text: str, keep_blank_ids: bool = False) -> ParseResult:
    """
    Parse CSV text whose first non-empty line is the header.

    Args:
        text: CSV document
        keep_blank_ids: Reproduce blank-id overwrite (see ``reconcile_row``)

    Returns:
        ParseResult with one row per non-empty data line and the collected errors.
        A syntax error stops parsing and marks the result incomplete.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    result = ParseResult()
    reader = csv.reader(io.StringIO(text, newline=""))
    header: List[str] | None = None
    stamp = next_import_stamp()
    index = 0

    try:
        for cells in reader:
            if not cells:
                continue
            if header is None:
                header = cells
                continue

            row_number = index + 1
            if len(cells) != len(header):
                result.errors.append(
                    f"Row {row_number}: expected {len(header)} fields but found {len(cells)}"
                )
            # zip stops at the shorter side: surplus cells drop, missing keys stay absent
            raw: Dict[str, str] = dict(zip(header, cells))

            missing = [field for field in REQUIRED_FIELDS if not raw.get(field)]
            if missing:
                result.errors.append(f"Row {row_number}: missing {' and '.join(missing)}")

            result.rows.append(reconcile_row(raw, index, stamp, keep_blank_ids=keep_blank_ids))
            index += 1
    except csv.Error as e:
        result.errors.append(f"CSV syntax error near line {reader.line_num}: {e}")
        result.complete = False

    logger.info(f"Parsed {len(result.rows)} rows with {len(result.errors)} errors")
    return result


def _cell(value: Any) -> str:
    text = cell_text(value)
    return "" if text is None else text


def serialize_csv(rows: Sequence[Mapping[str, Any]], visible_keys: Sequence[str]) -> str:
    """
    Project rows onto ``visible_keys`` and render them as CSV.

    The header is always written, even for zero rows. Cells are quoted only
    when they contain a comma, a quote or a line break.
    """
    output_buffer = io.StringIO()
    writer = csv.writer(output_buffer)
    writer.writerow(list(visible_keys))
    for row in rows:
        writer.writerow([_cell(row.get(key)) for key in visible_keys])
    return output_buffer.getvalue()
