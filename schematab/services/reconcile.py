from __future__ import annotations

import logging
from collections.abc import Sequence

from ..errors import HeaderMismatchError, SchemaColumnCountError
from ..models.schema import Schema

"""Header reconciliation service.

Maps each field of a parsed header record to the schema column id it names.

Strict mode (default):
- header field count must equal the schema column count
- the field at position i must name column i, either by id or by the
  explicit header override of that column (the slot is then remapped to the id)

Lenient mode:
- header fields are matched by name anywhere in the schema
- unknown fields map to None and their data is skipped
"""

__all__ = [
    "reconcile_headers",
]

logger = logging.getLogger(__name__)


def _reconcile_strict(schema: Schema, fields: Sequence[str]) -> list[str | None]:
    if len(fields) != len(schema):
        raise SchemaColumnCountError(expected=len(schema), actual=len(fields))
    slots: list[str | None] = []
    for position, (col, field) in enumerate(zip(schema, fields, strict=True)):
        if not col.matches_header(field):
            raise HeaderMismatchError(position, col.header, field)
        slots.append(col.id)
    return slots


def _reconcile_lenient(schema: Schema, fields: Sequence[str]) -> list[str | None]:
    slots: list[str | None] = []
    claimed: set[str] = set()
    for position, field in enumerate(fields):
        # id 一致を優先し、次に header 上書き一致
        col = schema.get(field)
        if col is None:
            col = next((c for c in schema if c.matches_header(field)), None)
        if col is None:
            logger.debug("header field skipped (not in schema): position=%s field=%r", position, field)
            slots.append(None)
            continue
        if col.id in claimed:
            raise HeaderMismatchError(position, col.header, field)
        claimed.add(col.id)
        slots.append(col.id)
    missing = [c.id for c in schema if c.id not in claimed]
    if missing:
        logger.debug("schema columns absent from header (defaults apply): %s", missing)
    return slots


def reconcile_headers(
    schema: Schema, fields: Sequence[str], strict: bool = True
) -> list[str | None]:
    """Resolve the column id of every header slot.

    Returns:
        List aligned with ``fields``; each item is the column id the slot feeds,
        or None for a skipped slot (lenient mode only)

    Raises:
        SchemaColumnCountError: Strict mode, field count differs from schema
        HeaderMismatchError: A field does not name its column (strict), or two
            fields name the same column (lenient)
    """
    if strict:
        return _reconcile_strict(schema, fields)
    return _reconcile_lenient(schema, fields)
