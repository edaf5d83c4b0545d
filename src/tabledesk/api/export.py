"""Export API: CSV download payloads built from the current view."""

from pathlib import Path
from typing import Sequence

from pydantic import BaseModel

from ..parsing.csv_codec import serialize_csv
from ..table.models import ColumnDef, Row, ViewQuery
from .view_api import filter_and_sort

EXPORT_FILENAME = "export.csv"
EXPORT_CONTENT_TYPE = "text/csv;charset=utf-8"


class ExportPayload(BaseModel):
    """A named CSV document ready to hand to a download or a file."""
    filename: str = EXPORT_FILENAME
    content_type: str = EXPORT_CONTENT_TYPE
    content: str


def export_rows(
    rows: Sequence[Row],
    columns: Sequence[ColumnDef],
    query: ViewQuery | None = None,
    filename: str = EXPORT_FILENAME,
) -> ExportPayload:
    """
    Export the searched and sorted rows (all pages) as CSV.

    Args:
        rows: Row snapshot
        columns: Column definitions in display order; only visible ones export
        query: Optional view state; its search and sort apply, paging does not
        filename: Download name

    Returns:
        ExportPayload with the CSV text
    """
    if query is not None:
        rows = filter_and_sort(rows, query)
    visible_keys = [column.key for column in columns if column.visible]
    return ExportPayload(filename=filename, content=serialize_csv(rows, visible_keys))


def write_export(payload: ExportPayload, out: Path) -> str:
    """Write a payload to disk; a directory target gets the payload's filename."""
    target = out / payload.filename if out.is_dir() else out
    target.write_text(payload.content, encoding="utf-8", newline="")
    return f"Exported to {target}"
