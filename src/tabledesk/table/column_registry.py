"""ColumnRegistry: ordered, persisted column definitions."""

import re
from typing import Any, List, Optional, Sequence

from pydantic import TypeAdapter

from tabledesk.persistence.kv_store import KeyValueStore
from tabledesk.persistence.snapshots import load_snapshot, save_snapshot
from tabledesk.table.defaults import COLUMNS_KEY, DEFAULT_COLUMNS
from tabledesk.table.models import ColumnDef
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)

_columns_adapter = TypeAdapter(List[ColumnDef])


class DuplicateColumnError(ValueError):
    """Raised when adding a column whose key is already registered."""


def column_key_from_label(label: str) -> str:
    """Derive a row field key from a column label ("Start Date" -> "start_date")."""
    cleaned = label.strip()
    if not cleaned:
        raise ValueError("Column label must not be empty")
    return re.sub(r"\s+", "_", cleaned.lower())


def move_column(columns: Sequence[ColumnDef], from_index: int, to_index: int) -> List[ColumnDef]:
    """
    Move one column to a new position, as a header drag-and-drop does.

    Returns a new list; the input is left untouched.

    Raises:
        IndexError: If either index is out of range
    """
    size = len(columns)
    if not (0 <= from_index < size and 0 <= to_index < size):
        raise IndexError(f"Column move {from_index} -> {to_index} out of range for {size} columns")
    moved = list(columns)
    column = moved.pop(from_index)
    moved.insert(to_index, column)
    return moved


class ColumnRegistry:
    """Ordered column definitions; list order is display and export order."""

    def __init__(self, kv: KeyValueStore, columns: Optional[Sequence[ColumnDef]] = None):
        self._kv = kv
        if columns is None:
            columns = _columns_adapter.validate_python(DEFAULT_COLUMNS)
        self._columns: List[ColumnDef] = [c.model_copy() for c in columns]

    @classmethod
    def load(cls, kv: KeyValueStore) -> "ColumnRegistry":
        """Initialize from persistence, falling back to the default columns."""
        raw = load_snapshot(kv, COLUMNS_KEY, DEFAULT_COLUMNS, validate=_validate_columns)
        return cls(kv, _columns_adapter.validate_python(raw))

    @property
    def columns(self) -> List[ColumnDef]:
        return [c.model_copy() for c in self._columns]

    def visible_columns(self) -> List[ColumnDef]:
        return [c.model_copy() for c in self._columns if c.visible]

    def visible_keys(self) -> List[str]:
        return [c.key for c in self._columns if c.visible]

    def get(self, key: str) -> Optional[ColumnDef]:
        for column in self._columns:
            if column.key == key:
                return column.model_copy()
        return None

    def toggle_visibility(self, key: str) -> List[ColumnDef]:
        """Flip ``visible`` on the matching column; unknown keys change nothing."""
        for column in self._columns:
            if column.key == key:
                column.visible = not column.visible
                break
        self._persist()
        return self.columns

    def add(self, column: ColumnDef) -> List[ColumnDef]:
        """
        Append a column to the end of the order.

        Raises:
            DuplicateColumnError: If a column with the same key exists
        """
        if any(c.key == column.key for c in self._columns):
            raise DuplicateColumnError(f"Column already exists: {column.key}")
        self._columns.append(column.model_copy())
        self._persist()
        logger.info(f"Added column {column.key!r}")
        return self.columns

    def reorder(self, new_order: Sequence[ColumnDef]) -> List[ColumnDef]:
        """Replace the whole ordered list verbatim (no permutation check)."""
        self._columns = [c.model_copy() for c in new_order]
        self._persist()
        return self.columns

    def _persist(self) -> None:
        save_snapshot(self._kv, COLUMNS_KEY, [c.model_dump() for c in self._columns])


def _validate_columns(value: Any) -> List[dict]:
    columns = _columns_adapter.validate_python(value)
    return [c.model_dump() for c in columns]
