from __future__ import annotations

import pytest

from schematab import TableBuffer
from schematab.errors import RequiredFieldError


def _table() -> TableBuffer:
    return TableBuffer(
        [
            {"id": "name", "required": True},
            {"id": "seq", "default": lambda i: i + 1},
            {"id": "kind", "default": "std"},
            "note",
        ]
    )


def test_close_without_open_row_is_noop():
    table = _table()
    table.new_row()
    table.end_row()
    assert table.cursor == 0
    assert len(table) == 0


def test_close_fills_defaults_and_nulls():
    table = _table()
    table.set("name", "a")
    table.new_row()
    assert table.cursor == 1
    assert table.is_open is False
    assert table[0] == {"name": "a", "seq": 1, "kind": "std", "note": None}


def test_computed_default_uses_closed_row_index():
    table = _table()
    table.add_row({"name": "a"}).add_row({"name": "b"}).add_row({"name": "c"})
    assert [r["seq"] for r in table] == [1, 2, 3]


def test_explicit_value_beats_default():
    table = _table()
    table.add_row({"name": "a", "seq": 99, "kind": "x"})
    assert table[0]["seq"] == 99
    assert table[0]["kind"] == "x"


def test_required_missing_on_first_row_is_exempt():
    table = _table()
    table.set("note", "first")
    table.new_row()
    assert table[0]["name"] is None
    assert table.cursor == 1


def test_required_missing_on_later_row_raises():
    table = _table()
    table.add_row({"name": "a"})
    table.set("note", "no name")
    with pytest.raises(RequiredFieldError) as e:
        table.end_row()
    assert e.value.column == "name"
    assert e.value.row == 1
    # 行は開いたまま、内容も変わらない
    assert table.cursor == 1
    assert table.is_open is True
    assert table[1] == {"note": "no name"}
    table.set("name", "b")
    table.end_row()
    assert table.cursor == 2


def test_required_satisfied_by_default():
    table = TableBuffer(["x", {"id": "status", "required": True, "default": "new"}])
    table.add_row({"x": "1"}).add_row({"x": "2"})
    assert table[1]["status"] == "new"


def test_closed_rows_iteration():
    table = _table()
    table.add_row({"name": "a"})
    table.set("name", "b")
    assert [r["name"] for r in table.closed_rows()] == ["a"]
    assert [r["name"] for r in table] == ["a", "b"]


def test_row_access_returns_copies():
    table = _table()
    table.add_row({"name": "a"})
    row = table[0]
    row["name"] = "changed"
    assert table[0]["name"] == "a"
    with pytest.raises(IndexError):
        table[5]


def test_reset():
    table = _table()
    table.add_row({"name": "a"})
    table.reset()
    assert len(table) == 0
    assert table.cursor == 0
