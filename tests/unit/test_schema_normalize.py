from __future__ import annotations

import pytest

from schematab.errors import SchemaError
from schematab.models.column_spec import ColumnSpec, Computed, Constant, ValueKind
from schematab.models.schema import Schema, normalize_schema


def test_positional_form():
    schema = normalize_schema(["id", "value"])
    assert schema.ids == ["id", "value"]
    assert schema.headers == ["id", "value"]
    assert not any(c.has_header_override for c in schema)


def test_named_form_preserves_order():
    schema = normalize_schema({"b": None, "a": {"header": "Alpha", "required": True}})
    assert schema.ids == ["b", "a"]
    assert schema.headers == ["b", "Alpha"]
    a = schema.get("a")
    assert a is not None and a.required and a.has_header_override


def test_mixed_positional_entries():
    schema = normalize_schema(
        [
            "name",
            {"id": "amt", "header": "Amount", "type": "float"},
            ("code", {"regex": r"^[A-Z]{3}$"}),
            ColumnSpec(id="note", header="Note"),
        ]
    )
    assert schema.ids == ["name", "amt", "code", "note"]
    assert schema.get("amt").kind is ValueKind.FLOAT
    assert schema.get("code").regex.pattern == r"^[A-Z]{3}$"
    assert "note" in schema and "missing" not in schema
    assert len(schema) == 4


def test_default_variants():
    schema = normalize_schema(
        {
            "a": {"default": 0},
            "b": {"default": lambda i: f"row-{i}"},
            "c": {"default": Constant("k")},
            "d": {"default": None},
        }
    )
    assert schema.get("a").default == Constant(0)
    assert isinstance(schema.get("b").default, Computed)
    assert schema.get("b").default_for(4) == "row-4"
    assert schema.get("c").default_for(9) == "k"
    assert schema.get("d").default == Constant(None)


def test_schema_passthrough():
    schema = normalize_schema(["a"])
    assert normalize_schema(schema) is schema


@pytest.mark.parametrize(
    "raw",
    [
        [42],
        [("a", "not-a-mapping")],
        [{"header": "no id"}],
        {"a": "header?"},
        [""],
        "a,b",
        [{"id": "a", "colour": "red"}],
    ],
)
def test_unexpected_entries_rejected(raw):
    with pytest.raises(SchemaError):
        normalize_schema(raw)


def test_empty_schema_rejected():
    with pytest.raises(SchemaError):
        normalize_schema([])
    with pytest.raises(SchemaError):
        Schema(columns=())


def test_duplicate_ids_rejected():
    with pytest.raises(SchemaError) as e:
        normalize_schema(["a", {"id": "a", "header": "A"}])
    assert e.value.column == "a"


@pytest.mark.parametrize(
    "params",
    [
        {"regex": "(["},
        {"type": "decimal"},
        {"type": 5},
        {"header": 3},
        {"required": "yes"},
    ],
)
def test_invalid_parameters_rejected(params):
    with pytest.raises(SchemaError):
        normalize_schema({"col": params})
