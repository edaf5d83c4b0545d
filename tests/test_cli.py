"""CLI behavior tests."""

import pytest

import tabledesk.cli as cli
from tabledesk.persistence.kv_store import InMemoryKeyValueStore
from tabledesk.workspace import Workspace


@pytest.fixture
def shared_kv(monkeypatch):
    kv = InMemoryKeyValueStore()
    monkeypatch.setattr(cli, "_load_workspace", lambda _args: Workspace(kv))
    return kv


def test_view_prints_page(shared_kv, capsys):
    cli.main(["view", "--sort", "age", "--desc", "--page-size", "2"])

    out = capsys.readouterr().out
    assert out.index("Doby") < out.index("John")
    assert "Alice" not in out
    assert "Page 1 of 2 (3 rows)" in out


def test_view_search(shared_kv, capsys):
    cli.main(["view", "--search", "JOHN"])

    out = capsys.readouterr().out
    assert "john@example.com" in out
    assert "alice@example.com" not in out


def test_import_then_export(shared_kv, tmp_path, capsys):
    source = tmp_path / "in.csv"
    source.write_text("name,email\nZed,zed@x.com\n,anon@x.com\n", encoding="utf-8")

    cli.main(["import", str(source)])
    out = capsys.readouterr().out
    assert "Imported 2 rows" in out
    assert "Row 2: missing name" in out

    cli.main(["export", "--search", "zed"])
    out = capsys.readouterr().out
    assert out.splitlines() == ["name,email,age,role", "Zed,zed@x.com,0,Viewer"]


def test_export_to_file(shared_kv, tmp_path, capsys):
    cli.main(["export", "--out", str(tmp_path)])

    assert (tmp_path / "export.csv").exists()
    assert "Exported to" in capsys.readouterr().out


def test_rows_edit_and_delete(shared_kv, capsys):
    cli.main(["rows", "edit", "1", "name=Alicia", "age=28"])
    cli.main(["rows", "delete", "2"])
    cli.main(["rows", "delete", "2"])

    out = capsys.readouterr().out
    assert "Updated row 1" in out
    assert "Deleted row 2" in out
    assert "No row with id 2" in out

    workspace = Workspace(shared_kv)
    assert workspace.rows.get("1")["name"] == "Alicia"
    assert workspace.rows.get("2") is None


def test_rows_edit_rejects_bad_age(shared_kv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["rows", "edit", "1", "age=old"])

    assert excinfo.value.code == 1
    assert "Age must be a number" in capsys.readouterr().err


def test_columns_commands(shared_kv, capsys):
    cli.main(["columns", "add", "Phone Number"])
    cli.main(["columns", "toggle", "email"])
    cli.main(["columns", "move", "4", "0"])
    cli.main(["columns", "list"])

    out = capsys.readouterr().out
    assert "Added column phone_number" in out
    assert "email: hidden" in out
    assert "Column order: phone_number, name, email, age, role" in out
    assert " 2 [ ] email (Email)" in out


def test_columns_add_duplicate_exits(shared_kv, capsys):
    with pytest.raises(SystemExit):
        cli.main(["columns", "add", "Name"])

    assert "already exists" in capsys.readouterr().err


def test_seed_without_fetcher_reports_skip(shared_kv, capsys):
    cli.main(["seed"])

    assert "rows unchanged" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    cli.main([])

    assert "usage: tabledesk" in capsys.readouterr().out


def test_parse_assignments_rejects_missing_equals():
    with pytest.raises(ValueError):
        cli._parse_assignments(["age"])


@pytest.mark.parametrize("size", ["0", "-3", "five"])
def test_view_rejects_non_positive_page_size(shared_kv, capsys, size):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["view", "--page-size", size])

    assert excinfo.value.code == 2
    assert "--page-size" in capsys.readouterr().err
