"""Domain models for the schema-governed table buffer.

This package contains the column declaration, schema, row and option models
used throughout the application.
"""

from .column_spec import ColumnSpec, Computed, Constant, Default, ValueKind, kind_of
from .config_models import TableOptions
from .error_record import ErrorRecord
from .row import Row
from .schema import Schema, normalize_schema

__all__ = [
    # Schema models
    "ColumnSpec",
    "Computed",
    "Constant",
    "Default",
    "Schema",
    "ValueKind",
    "kind_of",
    "normalize_schema",
    # Buffer models
    "Row",
    "TableOptions",
    # Error log
    "ErrorRecord",
]
