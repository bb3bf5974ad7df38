from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Error log generation & buffering module.

- JSON Lines 固定スキーマ (追加キー禁止, error_log_schema.json)
- 起動ごとに `logs/errors-YYYYMMDD-HHMMSS.log` (UTC) を生成 (必要時)
- バッファリングしてまとめて書き出し
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "ERROR_LOG_SCHEMA_PATH",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"
ERROR_LOG_SCHEMA_PATH = Path(__file__).parent / "error_log_schema.json"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush writes JSON Lines.

    - flush() appends every buffered record to the log file (created on demand)
    - the file path is fixed on first access
    - no thread safety (serial use only)
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
