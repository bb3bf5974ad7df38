from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

"""Check result models.

Aggregate the outcome of loading one or more delimited files against a
table definition (CLI ``check`` command).
"""

__all__ = [
    "FileStatus",
    "FileStat",
    "CheckResult",
]


class FileStatus(Enum):
    """Outcome of loading a single file.

    - SUCCESS: every record loaded
    - FAILED: the load raised a TableError (buffer restored, nothing kept)
    """
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    """Per-file load statistics."""
    file_name: str
    status: FileStatus
    rows: int  # 成功時の読み込み行数
    elapsed_seconds: float
    error_type: str | None = None  # 失敗時の UPPER_SNAKE 分類


@dataclass(frozen=True)
class CheckResult:
    """Aggregated results for a check run (SUMMARY line source)."""
    success_files: int
    failed_files: int
    total_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
