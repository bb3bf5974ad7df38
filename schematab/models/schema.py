from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import SchemaError
from .column_spec import ColumnSpec, Computed, Constant, ValueKind

"""Schema model and normalizer.

A raw schema may be given in named form (mapping of id -> parameters) or
positional form (sequence of ids, parameter records carrying an ``id`` key,
``(id, params)`` pairs or ready ColumnSpec objects). Both forms normalize
into the same ordered Schema.
"""

__all__ = [
    "Schema",
    "normalize_schema",
]

PARAMETER_KEYS = frozenset({"header", "default", "required", "regex", "type"})


@dataclass(frozen=True)
class Schema:
    """Ordered, non-empty sequence of column declarations with unique ids."""
    columns: tuple[ColumnSpec, ...]

    def __post_init__(self) -> None:
        if not self.columns:
            raise SchemaError("schema must declare at least one column")
        seen: set[str] = set()
        for col in self.columns:
            if col.id in seen:
                raise SchemaError(f'duplicate column id "{col.id}"', column=col.id)
            seen.add(col.id)

    @property
    def ids(self) -> list[str]:
        return [c.id for c in self.columns]

    @property
    def headers(self) -> list[str]:
        return [c.header for c in self.columns]

    def get(self, column_id: str) -> ColumnSpec | None:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    def __contains__(self, column_id: object) -> bool:
        return any(c.id == column_id for c in self.columns)

    def __iter__(self) -> Iterator[ColumnSpec]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)


def _build_column(column_id: Any, params: Mapping[str, Any] | None) -> ColumnSpec:
    if not isinstance(column_id, str) or not column_id:
        raise SchemaError(f"unexpected schema entry: column id must be a non-empty string, got {column_id!r}")
    params = params or {}
    unknown = set(params) - PARAMETER_KEYS
    if unknown:
        raise SchemaError(
            f'unexpected schema entry: unknown parameters {sorted(unknown)} for column "{column_id}"',
            column=column_id,
        )

    header = params.get("header")
    if header is not None and not isinstance(header, str):
        raise SchemaError(f'header of column "{column_id}" must be a string', column=column_id)

    required = params.get("required", False)
    if not isinstance(required, bool):
        raise SchemaError(f'required flag of column "{column_id}" must be a boolean', column=column_id)

    regex = None
    if params.get("regex") is not None:
        try:
            regex = re.compile(params["regex"])
        except (re.error, TypeError) as e:
            raise SchemaError(f'invalid regex for column "{column_id}": {e}', column=column_id) from e

    kind = None
    tag = params.get("type")
    if tag is not None:
        if isinstance(tag, ValueKind):
            kind = tag
        elif isinstance(tag, str):
            try:
                kind = ValueKind.parse(tag)
            except ValueError as e:
                raise SchemaError(f'column "{column_id}": {e}', column=column_id) from e
        else:
            raise SchemaError(f'type of column "{column_id}" must be a string tag', column=column_id)

    default = None
    if "default" in params:
        raw_default = params["default"]
        if isinstance(raw_default, (Constant, Computed)):
            default = raw_default
        elif callable(raw_default):
            default = Computed(raw_default)
        else:
            default = Constant(raw_default)

    return ColumnSpec(
        id=column_id,
        header=header if header is not None else column_id,
        default=default,
        required=required,
        regex=regex,
        kind=kind,
        has_header_override=header is not None,
    )


def _normalize_entry(entry: Any) -> ColumnSpec:
    """Normalize one positional entry."""
    if isinstance(entry, ColumnSpec):
        return entry
    if isinstance(entry, str):
        return _build_column(entry, None)
    if isinstance(entry, Mapping):
        if "id" not in entry:
            raise SchemaError(f"unexpected schema entry: parameter record without id: {entry!r}")
        params = {k: v for k, v in entry.items() if k != "id"}
        return _build_column(entry["id"], params)
    if isinstance(entry, tuple) and len(entry) == 2:
        column_id, params = entry
        if params is not None and not isinstance(params, Mapping):
            raise SchemaError(f"unexpected schema entry: {entry!r}")
        return _build_column(column_id, params)
    raise SchemaError(f"unexpected schema entry: {entry!r}")


def normalize_schema(raw: Schema | Mapping[str, Any] | Sequence[Any]) -> Schema:
    """Normalize a raw column declaration into a Schema.

    Parameters
    ----------
    raw: Schema (returned as is), named mapping ``{id: params | None}`` or a
        sequence of positional entries (str / record with ``id`` / pair / ColumnSpec)

    Raises
    ------
    SchemaError: unexpected entry, unknown parameter, invalid rule, duplicate id,
        or empty schema
    """
    if isinstance(raw, Schema):
        return raw
    columns: list[ColumnSpec] = []
    if isinstance(raw, Mapping):
        for column_id, params in raw.items():
            if params is not None and not isinstance(params, Mapping):
                raise SchemaError(f"unexpected schema entry: {column_id!r}: {params!r}")
            columns.append(_build_column(column_id, params))
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        for entry in raw:
            columns.append(_normalize_entry(entry))
    else:
        raise SchemaError(f"unexpected schema: {raw!r}")
    return Schema(columns=tuple(columns))
