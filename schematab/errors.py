from __future__ import annotations

from typing import Any

"""Error taxonomy for schema-governed tables.

Every failure raised by the schema normalizer, the delimited reader and the
table buffer derives from TableError. Each class carries a fixed UPPER_SNAKE
``error_type`` used by the JSON Lines error log (logging/error_log.py), plus
the row / column context when it is known.
"""

__all__ = [
    "TableError",
    "SchemaError",
    "HeaderMismatchError",
    "SchemaColumnCountError",
    "UnknownColumnError",
    "ValidationError",
    "DuplicateCellError",
    "RequiredFieldError",
    "DelimitedParseError",
]


class TableError(Exception):
    """Base exception for table buffer errors."""

    error_type = "TABLE_ERROR"

    def __init__(self, message: str, *, row: int | None = None, column: str | None = None) -> None:
        super().__init__(message)
        self.row = row
        self.column = column


class SchemaError(TableError):
    """Raised when a column declaration cannot be normalized."""

    error_type = "SCHEMA_ERROR"


class HeaderMismatchError(TableError):
    """Raised when a header field does not match the schema column at its slot."""

    error_type = "HEADER_MISMATCH"

    def __init__(self, position: int, expected: str, actual: str) -> None:
        super().__init__(
            f'column "{expected}" does not match "{actual}" (position {position})',
            row=0,
            column=expected,
        )
        self.position = position
        self.expected = expected
        self.actual = actual


class SchemaColumnCountError(TableError):
    """Raised when the header record and the schema differ in column count."""

    error_type = "COLUMN_COUNT_MISMATCH"

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"supplied columns ({actual}) do not match schema columns ({expected})",
            row=0,
        )
        self.expected = expected
        self.actual = actual


class UnknownColumnError(TableError):
    """Raised when a write or read targets a column the schema does not declare."""

    error_type = "UNKNOWN_COLUMN"

    def __init__(self, column: str) -> None:
        super().__init__(f'unknown column "{column}"', column=column)


class ValidationError(TableError):
    """Raised when a value fails the regex or type rule of its column."""

    error_type = "VALIDATION_FAILED"

    def __init__(self, column: str, value: Any, row: int | None = None) -> None:
        super().__init__(f'data not valid for column "{column}": {value!r}', row=row, column=column)
        self.value = value


class DuplicateCellError(TableError):
    """Raised when a cell of the open row is written twice."""

    error_type = "DUPLICATE_CELL"

    def __init__(self, column: str, row: int) -> None:
        super().__init__(
            f'cell "{column}" of row {row} already contains data',
            row=row,
            column=column,
        )


class RequiredFieldError(TableError):
    """Raised when a row is closed while a required column is still empty."""

    error_type = "REQUIRED_FIELD"

    def __init__(self, column: str, row: int) -> None:
        super().__init__(
            f'cannot close row {row}: column "{column}" is empty, this field is required',
            row=row,
            column=column,
        )


class DelimitedParseError(TableError):
    """Raised when the input text cannot be tokenized into records."""

    error_type = "PARSE_ERROR"
