"""In-place row editing with validate-before-commit."""

import math
from typing import Any, Dict, List, Optional

from tabledesk.table.models import Row
from tabledesk.table.row_store import RowStore
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)


class RowValidationError(ValueError):
    """A pending edit failed validation; nothing was committed."""


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return not math.isnan(value)
    text = str(value).strip()
    if "_" in text:
        # float() accepts digit separators, plain numeric text does not
        return False
    try:
        return not math.isnan(float(text))
    except ValueError:
        return False


def validate_row(row: Row) -> List[str]:
    """
    Check a row before it is committed.

    Returns:
        List of problems (empty when the row is acceptable)
    """
    problems = []
    age = row.get("age")
    if age is not None and str(age).strip() != "" and not _is_numeric(age):
        problems.append("Age must be a number")
    return problems


class RowEditor:
    """
    Holds one pending edit. ``save`` commits through the store only when the
    edit validates; a rejected save keeps the pending values for correction.
    """

    def __init__(self, store: RowStore):
        self._store = store
        self.editing_id: Optional[str] = None
        self.pending: Dict[str, Any] = {}

    @property
    def active(self) -> bool:
        return self.editing_id is not None

    def begin(self, row: Row) -> None:
        self.editing_id = row["id"]
        self.pending = dict(row)

    def set_field(self, key: str, value: Any) -> None:
        if not self.active:
            raise RuntimeError("No edit in progress")
        self.pending[key] = value

    def save(self) -> List[Row]:
        """
        Validate and commit the pending edit.

        Returns:
            Row snapshot after the update

        Raises:
            RuntimeError: If no edit is in progress
            RowValidationError: If the edit is invalid (pending state kept)
        """
        if not self.active:
            raise RuntimeError("No edit in progress")
        problems = validate_row(self.pending)
        if problems:
            logger.info(f"Rejected edit of row {self.editing_id}: {'; '.join(problems)}")
            raise RowValidationError("; ".join(problems))
        rows = self._store.update(self.pending)
        self.editing_id = None
        self.pending = {}
        return rows

    def cancel(self) -> None:
        self.editing_id = None
        self.pending = {}
