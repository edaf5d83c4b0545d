"""Key-value string stores backing the persisted table state."""

from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

from tabledesk.persistence.schema import KVEntry
from tabledesk.persistence.sqlite_client import session_context
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """Persistence adapter consumed by the row and column stores."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteKeyValueStore:
    """
    Store backed by a single ``kv_entries`` table in a SQLite file.

    Each ``set`` is its own committed transaction, so writes land in the
    order they are issued and a later write to the same key wins.
    """

    def __init__(self, sqlite_path: str):
        self.sqlite_path = sqlite_path

    def get(self, key: str) -> Optional[str]:
        with session_context(self.sqlite_path) as session:
            entry = session.get(KVEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with session_context(self.sqlite_path) as session:
            session.merge(
                KVEntry(
                    key=key,
                    value=value,
                    updated_at_utc=datetime.now(timezone.utc).isoformat(),
                )
            )
            session.commit()
        logger.debug(f"Persisted {key} ({len(value)} bytes) to {self.sqlite_path}")
