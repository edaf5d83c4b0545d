"""JSON snapshot load/save on top of a key-value store."""

import copy
import json
from typing import Any, Callable, Optional, TypeVar

from tabledesk.persistence.kv_store import KeyValueStore
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def load_snapshot(
    store: KeyValueStore,
    key: str,
    fallback: T,
    validate: Optional[Callable[[Any], T]] = None,
) -> T:
    """
    Load a JSON snapshot, answering any read problem with the fallback.

    Args:
        store: Key-value store to read from
        key: Snapshot key
        fallback: Built-in default; a deep copy is returned on fallback
        validate: Optional callable that checks/converts the decoded value
            and raises ValueError or TypeError when it has the wrong shape

    Returns:
        Decoded (and validated) snapshot, or a copy of ``fallback``
    """
    try:
        raw = store.get(key)
    except Exception as e:
        logger.warning(f"Could not read {key}, using defaults: {e}")
        return copy.deepcopy(fallback)

    if not raw:
        return copy.deepcopy(fallback)

    try:
        value = json.loads(raw)
        if validate is not None:
            value = validate(value)
    except (json.JSONDecodeError, ValueError, TypeError) as e:
        logger.warning(f"Ignoring malformed {key} snapshot, using defaults: {e}")
        return copy.deepcopy(fallback)
    return value


def save_snapshot(store: KeyValueStore, key: str, value: Any) -> None:
    """Write a JSON snapshot. Store errors propagate to the caller."""
    store.set(key, json.dumps(value))
