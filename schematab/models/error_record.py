from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from ..errors import TableError

"""ErrorRecord model for error logging.

This module defines the ErrorRecord dataclass used for structured error logging
when a delimited file fails to load into a table. It supports row=-1 as a
sentinel value for file-level errors where the specific row cannot be determined.

The record shape is pinned by schematab/logging/error_log_schema.json.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Input filename being loaded
        row: Row index (0-based data row). Use -1 for file-level errors where row is unknown
        column: Column id involved, or "" when not column-specific
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int  # 行番号。不明な場合 -1 許容
    column: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, column: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            column=column,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_error(file: str, error: TableError) -> ErrorRecord:
        """Build a record from a TableError, filling unknown context with sentinels."""
        return ErrorRecord.create(
            file=file,
            row=error.row if error.row is not None else -1,
            column=error.column or "",
            error_type=error.error_type,
            message=str(error),
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format.

        Returns:
            JSON string representation without extra keys (contract enforced)
        """
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
