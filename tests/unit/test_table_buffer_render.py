from __future__ import annotations

from schematab import TableBuffer


def test_render_end_to_end_with_defaults():
    table = TableBuffer([{"id": "name"}, {"id": "age", "type": "integer", "default": 0}])
    table.add_row({"name": "Alice", "age": 30})
    table.add_row({"name": "Bob"})
    assert table.render() == "name,age\nAlice,30\nBob,0\n"


def test_render_uses_display_headers():
    table = TableBuffer([{"id": "amt", "header": "Amount"}, "note"])
    table.add_row({"amt": 5, "note": "x"})
    assert table.render() == "Amount,note\n5,x\n"


def test_render_empty_table_emits_header_only():
    table = TableBuffer(["a", "b"])
    assert table.render() == "a,b\n"


def test_render_includes_open_row_with_lazy_defaults():
    table = TableBuffer(["a", {"id": "b", "default": lambda i: f"r{i}"}])
    table.add_row({"a": "x"})
    table.set("a", "y")
    assert table.render() == "a,b\nx,r0\ny,r1\n"
    # 開いた行はまだ疎
    assert table.to_json()[1] == {"a": "y"}


def test_render_none_as_empty_field():
    table = TableBuffer(["a", "b"])
    table.add_row({"a": "x"})
    assert table.render() == "a,b\nx,\n"


def test_render_quotes_delimiters_and_quotes():
    table = TableBuffer(["a", "b"])
    table.add_row({"a": "x,y", "b": 'say "hi"'})
    assert table.render() == 'a,b\n"x,y","say ""hi"""\n'


def test_render_custom_delimiter():
    table = TableBuffer(["a", "b"], delimiter=";")
    table.add_row({"a": "1", "b": "2"})
    assert table.to_csv() == "a;b\n1;2\n"
    assert str(table) == "a;b\n1;2\n"


def test_to_html_debug_table():
    table = TableBuffer(["a", "b"])
    table.add_row({"a": "x"})
    html = table.to_html()
    assert html.startswith("<table")
    assert "<td>x</td>" in html
