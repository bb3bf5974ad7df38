from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.check_result import FileStat, FileStatus

"""Progress display service with tqdm (TTY only).

Shows file progress (checked / total) with running success, failure and row
counts while the CLI checks several files. In non-TTY environments (CI, pipes)
no bar is created so that the labeled log output stays clean; the counters
are still maintained.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return sys.stdout.isatty()."""
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress for a check run."""

    def __init__(self, total_files: int, *, description: str = "Checking files") -> None:
        self.total_files = total_files
        self.description = description
        self.success = 0
        self.failed = 0
        self.rows = 0

        self.pbar: TqdmType[Any] | None = None
        if is_tty_enabled():
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )

    @property
    def enabled(self) -> bool:
        return self.pbar is not None

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def record(self, stat: FileStat) -> None:
        """Account for a finished file and advance the bar."""
        if stat.status is FileStatus.SUCCESS:
            self.success += 1
            self.rows += stat.rows
        else:
            self.failed += 1
        if self.pbar is not None:
            self.pbar.set_postfix(success=self.success, failed=self.failed, rows=self.rows)
            self.pbar.set_description(self.description)
            self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
