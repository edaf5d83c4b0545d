from .column_registry import ColumnRegistry, DuplicateColumnError, column_key_from_label, move_column
from .editing import RowEditor, RowValidationError
from .models import ColumnDef, ParseResult, Row, ViewQuery, ViewResult, make_row
from .row_store import RowStore

__all__ = [
    "ColumnDef",
    "ColumnRegistry",
    "DuplicateColumnError",
    "ParseResult",
    "Row",
    "RowEditor",
    "RowStore",
    "RowValidationError",
    "ViewQuery",
    "ViewResult",
    "column_key_from_label",
    "make_row",
    "move_column",
]
