"""schematab: schema-governed tabular data buffer.

Declare ordered columns (header, default, required flag, regex/type rule),
then either load delimited text into validated rows or build rows
programmatically and render them back to delimited text.
"""

from .errors import (
    DelimitedParseError,
    DuplicateCellError,
    HeaderMismatchError,
    RequiredFieldError,
    SchemaColumnCountError,
    SchemaError,
    TableError,
    UnknownColumnError,
    ValidationError,
)
from .models import ColumnSpec, Computed, Constant, Schema, TableOptions, ValueKind, normalize_schema
from .table import TableBuffer

__version__ = "0.1.0"

__all__ = [
    "TableBuffer",
    "TableOptions",
    "Schema",
    "ColumnSpec",
    "ValueKind",
    "Constant",
    "Computed",
    "normalize_schema",
    # errors
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
