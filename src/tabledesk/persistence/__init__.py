from .kv_store import InMemoryKeyValueStore, KeyValueStore, SqliteKeyValueStore
from .snapshots import load_snapshot, save_snapshot

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SqliteKeyValueStore",
    "load_snapshot",
    "save_snapshot",
]
