"""Tests for validated in-place row editing."""

import pytest

from tabledesk.table.editing import RowEditor, RowValidationError, validate_row


def test_save_commits_edit_in_place(row_store):
    editor = RowEditor(row_store)
    editor.begin(row_store.get("b"))
    editor.set_field("name", "Robert")
    editor.set_field("age", "26")

    rows = editor.save()

    assert rows[1]["name"] == "Robert"
    assert rows[1]["age"] == "26"
    assert editor.active is False


def test_non_numeric_age_rejected_and_pending_kept(row_store):
    editor = RowEditor(row_store)
    editor.begin(row_store.get("a"))
    editor.set_field("age", "thirty")

    with pytest.raises(RowValidationError, match="Age must be a number"):
        editor.save()

    assert row_store.get("a")["age"] == 30
    assert editor.active is True
    assert editor.pending["age"] == "thirty"

    editor.set_field("age", "31")
    editor.save()
    assert row_store.get("a")["age"] == "31"


def test_cancel_discards_pending(row_store):
    editor = RowEditor(row_store)
    editor.begin(row_store.get("a"))
    editor.set_field("name", "Nope")

    editor.cancel()

    assert editor.active is False
    assert row_store.get("a")["name"] == "Alice"


def test_editing_requires_begin(row_store):
    editor = RowEditor(row_store)

    with pytest.raises(RuntimeError):
        editor.set_field("name", "x")
    with pytest.raises(RuntimeError):
        editor.save()


@pytest.mark.parametrize("age", [30, 2.5, "42", " 7 ", "", None, "1e3"])
def test_acceptable_ages(age):
    assert validate_row({"id": "1", "age": age}) == []


@pytest.mark.parametrize("age", ["abc", "nan", "12 years", "1_000", True])
def test_rejected_ages(age):
    assert validate_row({"id": "1", "age": age}) == ["Age must be a number"]


def test_row_without_age_is_valid():
    assert validate_row({"id": "1", "name": "A", "email": "a@x.com"}) == []
