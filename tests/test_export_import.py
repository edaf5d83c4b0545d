"""Tests for the CSV file import and export boundaries."""

import tabledesk.api.import_api as import_api
from tabledesk.api.export import EXPORT_CONTENT_TYPE, export_rows, write_export
from tabledesk.api.import_api import import_csv_file, import_csv_text
from tabledesk.table.models import ColumnDef, ParseResult, ViewQuery
from tabledesk.table.row_store import RowStore

COLUMNS = [
    ColumnDef(key="name", label="Name", visible=True),
    ColumnDef(key="email", label="Email", visible=False),
    ColumnDef(key="age", label="Age", visible=True),
]


def test_export_uses_visible_columns_in_order(people):
    payload = export_rows(people, COLUMNS)

    assert payload.filename == "export.csv"
    assert payload.content_type == EXPORT_CONTENT_TYPE
    assert payload.content.splitlines() == ["name,age", "Alice,30", "Bob,25", "Carol,41"]


def test_export_applies_search_and_sort_but_not_paging(people):
    query = ViewQuery(search_text="example", sort_key="age", page_size=1, page_index=2)

    payload = export_rows(people, COLUMNS, query)

    assert payload.content.splitlines() == ["name,age", "Bob,25", "Alice,30", "Carol,41"]


def test_write_export_to_directory_and_file(people, tmp_path):
    payload = export_rows(people, COLUMNS)

    message = write_export(payload, tmp_path)
    assert message == f"Exported to {tmp_path / 'export.csv'}"
    assert (tmp_path / "export.csv").read_bytes().startswith(b"name,age\r\n")

    target = tmp_path / "custom.csv"
    write_export(payload, target)
    assert target.read_bytes().decode("utf-8") == payload.content


def test_import_replaces_rows_even_with_errors(row_store):
    result = import_csv_text(row_store, "name,email\nZoe,zoe@x.com\n,nobody@x.com\n")

    assert result.errors == ["Row 2: missing name"]
    assert [r["email"] for r in row_store.rows] == ["zoe@x.com", "nobody@x.com"]


def test_import_file_with_bom(row_store, tmp_path):
    path = tmp_path / "people.csv"
    path.write_bytes("id,name,email\r\n9,Nina,nina@x.com\r\n".encode("utf-8-sig"))

    result = import_csv_file(row_store, path)

    assert result.errors == []
    assert row_store.get("9")["name"] == "Nina"


def test_blank_id_import_survives_reload(row_store, kv):
    import_csv_text(row_store, "id,name,email\n,Zed,z@x.com\n7,Yan,y@x.com\n", keep_blank_ids=True)

    reloaded = RowStore.load(kv)

    assert [r["name"] for r in reloaded.rows] == ["Zed", "Yan"]
    assert reloaded.rows[0]["id"] == ""


def test_import_with_long_cell_keeps_every_row(row_store):
    text = "name,email,notes\nA,a@x.com," + "x" * 200_000 + "\nB,b@x.com,short\n"

    result = import_csv_text(row_store, text)

    assert result.complete is True
    assert result.errors == []
    assert [r["name"] for r in row_store.rows] == ["A", "B"]
    assert len(row_store.rows[0]["notes"]) == 200_000


def test_aborted_parse_leaves_stored_rows(row_store, people, monkeypatch):
    def broken_parse(text, keep_blank_ids=False):
        return ParseResult(rows=[], errors=["CSV syntax error near line 2: boom"], complete=False)

    monkeypatch.setattr(import_api, "parse_csv", broken_parse)

    result = import_csv_text(row_store, "name,email\nA,a@x.com\n")

    assert result.complete is False
    assert row_store.rows == people
