"""Tests for the key-value stores and JSON snapshots."""

import json

import pytest

from tabledesk.persistence.kv_store import InMemoryKeyValueStore, SqliteKeyValueStore
from tabledesk.persistence.snapshots import load_snapshot, save_snapshot
from tabledesk.persistence.sqlite_client import dispose_engine
from tabledesk.table.column_registry import ColumnRegistry
from tabledesk.table.models import ColumnDef
from tabledesk.table.row_store import RowStore


@pytest.fixture
def sqlite_kv(tmp_path):
    path = str(tmp_path / "tabledesk.db")
    yield SqliteKeyValueStore(path)
    dispose_engine(path)


def test_sqlite_get_missing_key(sqlite_kv):
    assert sqlite_kv.get("table_rows") is None


def test_sqlite_last_write_wins(sqlite_kv):
    sqlite_kv.set("k", "one")
    sqlite_kv.set("k", "two")

    assert sqlite_kv.get("k") == "two"


def test_sqlite_state_survives_new_store_instance(sqlite_kv):
    store = RowStore.load(sqlite_kv)
    store.delete("2")
    registry = ColumnRegistry.load(sqlite_kv)
    registry.add(ColumnDef(key="phone", label="Phone"))

    reopened = SqliteKeyValueStore(sqlite_kv.sqlite_path)

    assert [r["id"] for r in RowStore.load(reopened).rows] == ["1", "3"]
    assert ColumnRegistry.load(reopened).visible_keys() == ["name", "email", "age", "role", "phone"]


def test_save_snapshot_writes_json():
    kv = InMemoryKeyValueStore()

    save_snapshot(kv, "k", [{"a": 1}])

    assert json.loads(kv.get("k")) == [{"a": 1}]


def test_load_snapshot_empty_string_falls_back():
    kv = InMemoryKeyValueStore({"k": ""})

    assert load_snapshot(kv, "k", ["default"]) == ["default"]


def test_load_snapshot_validator_rejection_falls_back():
    kv = InMemoryKeyValueStore({"k": json.dumps({"not": "a list"})})

    def must_be_list(value):
        if not isinstance(value, list):
            raise TypeError("expected list")
        return value

    assert load_snapshot(kv, "k", [], validate=must_be_list) == []


def test_load_snapshot_returns_fresh_fallback_copies():
    fallback = [{"id": "1"}]
    kv = InMemoryKeyValueStore()

    loaded = load_snapshot(kv, "k", fallback)
    loaded[0]["id"] = "changed"

    assert fallback == [{"id": "1"}]
