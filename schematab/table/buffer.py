from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import replace
from typing import Any

import pandas as pd

from ..delimited.reader import read_delimited
from ..delimited.writer import write_delimited
from ..errors import DuplicateCellError, RequiredFieldError, UnknownColumnError, ValidationError
from ..models.column_spec import ColumnSpec
from ..models.config_models import TableOptions
from ..models.row import Row
from ..models.schema import Schema, normalize_schema
from ..services.reconcile import reconcile_headers

"""In-memory table buffer governed by a column schema.

Row store state machine:
- empty: cursor=0, no stored row
- first cell write materializes the open row at index ``cursor``
- closure fills untouched columns with defaults, checks required columns
  (rows after the first only), marks the row closed and advances the cursor
- the next open row is materialized lazily on its next write

Invariant: ``cursor`` == number of closed rows; ``rows[cursor]`` (if present)
is the open row.
"""

__all__ = [
    "TableBuffer",
]

logger = logging.getLogger(__name__)


class TableBuffer:
    """Schema-governed row buffer with delimited text load/render.

    Not safe for concurrent mutation: cell writes and closures are
    check-then-write sequences; callers serialize access.
    """

    def __init__(
        self,
        schema: Schema | Mapping[str, Any] | Sequence[Any],
        options: TableOptions | None = None,
        **overrides: Any,
    ) -> None:
        self.schema = normalize_schema(schema)
        if options is None:
            options = TableOptions(**overrides)
        elif overrides:
            options = replace(options, **overrides)
        self.options = options
        self._rows: list[Row] = []
        self._cursor = 0

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------
    @property
    def cursor(self) -> int:
        """Index of the open row (equals the number of closed rows)."""
        return self._cursor

    @property
    def is_open(self) -> bool:
        """True when the open row has been materialized by a write."""
        return len(self._rows) > self._cursor

    def _open_row(self) -> Row:
        if not self.is_open:
            self._rows.append(Row(index=self._cursor))
        return self._rows[self._cursor]

    def _column(self, column: str) -> ColumnSpec | None:
        col = self.schema.get(column)
        if col is None and self.options.strict_columns:
            raise UnknownColumnError(column)
        return col

    # ------------------------------------------------------------------
    # cell write
    # ------------------------------------------------------------------
    def _put(self, column: str, value: Any, validate: bool = True) -> None:
        col = self._column(column)
        if col is None:
            logger.debug("write to undeclared column ignored: column=%s row=%s", column, self._cursor)
            return
        if validate and not col.validate(value):
            raise ValidationError(column, value, row=self._cursor)
        if self.is_open and self._rows[self._cursor].holds(column):
            raise DuplicateCellError(column, self._cursor)
        self._open_row().values[column] = value

    def set(self, column: str, value: Any) -> None:
        """Write one cell of the open row (validated, write-once)."""
        self._put(column, value)

    def set_column(self, column: str, value: Any) -> TableBuffer:
        """Chaining form of set()."""
        self._put(column, value)
        return self

    def get(self, column: str, row: int | None = None) -> Any:
        """Read a stored cell (open row by default); None when the cell is absent."""
        if column not in self.schema:
            raise UnknownColumnError(column)
        index = self._cursor if row is None else row
        if 0 <= index < len(self._rows):
            return self._rows[index].values.get(column)
        return None

    def add_row(self, values: Mapping[str, Any]) -> TableBuffer:
        """Write every given cell then close the row.

        All cells are checked before any is written, so a rejected cell leaves
        the open row untouched. When closure fails on a required column the
        written cells are taken back as well.
        """
        accepted: list[tuple[str, Any]] = []
        for column, value in values.items():
            col = self._column(column)
            if col is None:
                logger.debug("write to undeclared column ignored: column=%s row=%s", column, self._cursor)
                continue
            if not col.validate(value):
                raise ValidationError(column, value, row=self._cursor)
            if self.is_open and self._rows[self._cursor].holds(column):
                raise DuplicateCellError(column, self._cursor)
            accepted.append((column, value))
        was_open = self.is_open
        before = dict(self._rows[self._cursor].values) if was_open else None
        for column, value in accepted:
            self._put(column, value, validate=False)
        try:
            return self.new_row()
        except RequiredFieldError:
            if was_open:
                self._rows[self._cursor].values = before
            elif self.is_open:
                self._rows.pop()
            raise

    # ------------------------------------------------------------------
    # row closure
    # ------------------------------------------------------------------
    def new_row(self) -> TableBuffer:
        """Close the open row and advance the cursor (no-op when no row is open).

        Raises:
            RequiredFieldError: A required column is None after defaulting
                (row 0 is exempt); the row stays open and unchanged
        """
        if not self.is_open:
            return self
        row = self._rows[self._cursor]
        filled: dict[str, Any] = {}
        for col in self.schema:
            value = row.values.get(col.id)
            filled[col.id] = col.default_for(row.index) if value is None else value
        # 先頭行 (index 0) は required 検査の対象外
        if row.index > 0:
            for col in self.schema:
                if col.required and filled[col.id] is None:
                    raise RequiredFieldError(col.id, row.index)
        row.values = filled
        row.closed = True
        self._cursor += 1
        return self

    def end_row(self) -> TableBuffer:
        """Alias of new_row()."""
        return self.new_row()

    # ------------------------------------------------------------------
    # bulk ingestion
    # ------------------------------------------------------------------
    def load(self, text: str) -> int:
        """Ingest delimited text (first line = header) into the buffer.

        Data records are appended after any rows already held. Field text is
        stored verbatim (no regex/type validation) but cells stay write-once.
        The row of the last record is left open.

        On any error the row store is restored to its pre-load state and the
        error is re-raised.

        Returns:
            Number of data records ingested
        """
        snapshot = ([r.copy() for r in self._rows], self._cursor)
        try:
            data = read_delimited(text, self.options.delimiter)
            slots = reconcile_headers(self.schema, data.header, strict=self.options.strict_headers)
            for record in data.records:
                self.new_row()
                for column, value in zip(slots, record, strict=False):
                    if column is None:
                        continue
                    self._put(column, value, validate=False)
        except Exception:
            self._rows, self._cursor = snapshot
            raise
        logger.debug("loaded rows=%s columns=%s cursor=%s", len(data.records), len(self.schema), self._cursor)
        return len(data.records)

    # ------------------------------------------------------------------
    # serialization
    # ------------------------------------------------------------------
    def _rendered_records(self) -> list[list[Any]]:
        records: list[list[Any]] = []
        for row in self._rows:
            record = []
            for col in self.schema:
                value = row.values.get(col.id)
                if value is None:
                    value = col.default_for(row.index)
                record.append(value)
            records.append(record)
        return records

    def render(self) -> str:
        """Render header line + every materialized row (open row included)."""
        return write_delimited(self.schema.headers, self._rendered_records(), self.options.delimiter)

    def to_csv(self) -> str:
        return self.render()

    def __str__(self) -> str:
        return self.render()

    def to_json(self) -> list[dict[str, Any]]:
        """Dump the raw row store (no default substitution)."""
        return [dict(row.values) for row in self._rows]

    def to_html(self) -> str:
        """Debug HTML table of the raw row store."""
        df = pd.DataFrame(self.to_json(), columns=self.schema.ids, dtype=object)
        return df.to_html(index=False, na_rep="")

    # ------------------------------------------------------------------
    # access
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> dict[str, Any]:
        return dict(self._rows[index].values)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        for row in self._rows:
            yield dict(row.values)

    def closed_rows(self) -> Iterator[dict[str, Any]]:
        for row in self._rows:
            if row.closed:
                yield dict(row.values)

    def reset(self) -> None:
        """Drop every row and return to the empty state."""
        self._rows = []
        self._cursor = 0

    def __repr__(self) -> str:
        return f"TableBuffer(columns={self.schema.ids!r}, rows={len(self._rows)}, cursor={self._cursor})"
