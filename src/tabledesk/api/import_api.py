"""Import API: CSV files and text into the row store."""

from pathlib import Path

from ..parsing.csv_codec import parse_csv
from ..table.models import ParseResult
from ..table.row_store import RowStore
from ..utils.logging import get_logger

logger = get_logger(__name__)


def read_csv_file(path: Path) -> str:
    """Read a user-selected CSV file as text (a UTF-8 BOM is dropped)."""
    return path.read_text(encoding="utf-8-sig")


def import_csv_text(store: RowStore, text: str, keep_blank_ids: bool = False) -> ParseResult:
    """
    Parse CSV text and replace every stored row with the result.

    Rows are replaced even when row errors were collected; the caller
    decides how to surface ``errors``. If a syntax error stopped parsing
    early the stored rows are left untouched.
    """
    result = parse_csv(text, keep_blank_ids=keep_blank_ids)
    if not result.complete:
        logger.warning(f"Import aborted after {len(result.rows)} rows, stored rows unchanged: {result.errors[-1]}")
        return result
    store.replace_all(result.rows)
    if result.errors:
        logger.warning(f"Imported {len(result.rows)} rows with {len(result.errors)} problems")
    else:
        logger.info(f"Imported {len(result.rows)} rows")
    return result


def import_csv_file(store: RowStore, path: Path, keep_blank_ids: bool = False) -> ParseResult:
    return import_csv_text(store, read_csv_file(path), keep_blank_ids=keep_blank_ids)
