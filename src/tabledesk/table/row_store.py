"""RowStore: the ordered, persisted collection of table rows."""

import copy
from typing import Any, List, Mapping, Optional

from tabledesk.persistence.kv_store import KeyValueStore
from tabledesk.persistence.snapshots import load_snapshot, save_snapshot
from tabledesk.table.defaults import ROWS_KEY, SAMPLE_ROWS
from tabledesk.table.models import Row
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)


def _validate_rows(value: Any) -> List[Row]:
    if not isinstance(value, list):
        raise ValueError("Rows snapshot must be a list")
    if not all(isinstance(row, dict) for row in value):
        raise ValueError("Each row must be an object")
    blank = sum(1 for row in value if row.get("id") in (None, ""))
    if blank:
        # blank ids come from --keep-blank-ids imports and are kept
        logger.warning(f"Loaded {blank} rows without an id")
    return value


class RowStore:
    """
    Owns the ordered rows. Every mutation is applied and then persisted
    synchronously before the method returns the new snapshot.
    """

    def __init__(self, kv: KeyValueStore, rows: Optional[List[Row]] = None):
        self._kv = kv
        self._rows: List[Row] = list(rows) if rows is not None else copy.deepcopy(SAMPLE_ROWS)

    @classmethod
    def load(cls, kv: KeyValueStore) -> "RowStore":
        """Initialize from persistence, falling back to the sample rows."""
        rows = load_snapshot(kv, ROWS_KEY, SAMPLE_ROWS, validate=_validate_rows)
        logger.debug(f"Loaded {len(rows)} rows")
        return cls(kv, rows)

    @property
    def rows(self) -> List[Row]:
        """Copy of the current rows."""
        return copy.deepcopy(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, row_id: str) -> Optional[Row]:
        for row in self._rows:
            if row.get("id") == row_id:
                return dict(row)
        return None

    def replace_all(self, rows: List[Mapping[str, Any]]) -> List[Row]:
        """Overwrite the whole collection. Id uniqueness is the caller's job."""
        self._rows = [dict(row) for row in rows]
        self._persist()
        return self.rows

    def update(self, row: Mapping[str, Any]) -> List[Row]:
        """
        Replace the row sharing ``row["id"]`` in place, keeping its position.

        An unknown id changes nothing. The collection is persisted either way.
        """
        row_id = row.get("id")
        for idx, existing in enumerate(self._rows):
            if existing.get("id") == row_id:
                self._rows[idx] = dict(row)
                break
        else:
            logger.debug(f"Update ignored, no row with id {row_id!r}")
        self._persist()
        return self.rows

    def delete(self, row_id: str) -> List[Row]:
        """Remove any row with this id. Deleting an absent id is a no-op."""
        self._rows = [row for row in self._rows if row.get("id") != row_id]
        self._persist()
        return self.rows

    def _persist(self) -> None:
        save_snapshot(self._kv, ROWS_KEY, self._rows)
