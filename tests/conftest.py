"""Pytest configuration and fixtures."""

import pytest

from tabledesk.persistence.kv_store import InMemoryKeyValueStore
from tabledesk.table.column_registry import ColumnRegistry
from tabledesk.table.row_store import RowStore


@pytest.fixture
def kv():
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def people():
    return [
        {"id": "a", "name": "Alice", "email": "alice@example.com", "age": 30, "role": "Admin"},
        {"id": "b", "name": "Bob", "email": "bob@example.com", "age": 25, "role": "Viewer"},
        {"id": "c", "name": "Carol", "email": "carol@example.com", "age": 41, "role": "IT"},
    ]


@pytest.fixture
def row_store(kv, people):
    store = RowStore.load(kv)
    store.replace_all(people)
    return store


@pytest.fixture
def column_registry(kv):
    return ColumnRegistry.load(kv)
