from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import TableConfig
from ..errors import TableError
from ..logging.error_log import ErrorLogBuffer
from ..models.check_result import CheckResult, FileStat, FileStatus
from ..models.error_record import ErrorRecord
from ..table.buffer import TableBuffer
from .progress import ProgressTracker

"""Check orchestration service.

Loads each delimited file into a fresh TableBuffer built from the table
definition, records failures in the JSON Lines error log, and aggregates
per-file statistics into a CheckResult.
"""

__all__ = [
    "load_file",
    "check_files",
]

logger = logging.getLogger(__name__)


def load_file(config: TableConfig, path: Path) -> TableBuffer:
    """Read ``path`` and load it into a new TableBuffer.

    Raises:
        OSError / UnicodeDecodeError: The file cannot be read as UTF-8 text
        TableError: The content does not fit the table definition
    """
    text = path.read_text(encoding="utf-8")
    table = config.build_table()
    table.load(text)
    return table


def _check_single_file(
    config: TableConfig, path: Path, error_log: ErrorLogBuffer
) -> FileStat:
    start = datetime.now(UTC)
    status = FileStatus.SUCCESS
    rows = 0
    error_type = None
    try:
        table = load_file(config, path)
        rows = len(table)
        logger.info(f"loaded file={path.name} rows={rows}")
    except TableError as e:
        status = FileStatus.FAILED
        error_type = e.error_type
        error_log.append(ErrorRecord.from_error(path.name, e))
        logger.error(f"file={path.name} {e.error_type}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        status = FileStatus.FAILED
        error_type = "FILE_READ_ERROR"
        error_log.append(ErrorRecord.create(path.name, -1, "", error_type, str(e)))
        logger.error(f"file={path.name} {error_type}: {e}")
    elapsed = (datetime.now(UTC) - start).total_seconds()
    return FileStat(
        file_name=path.name,
        status=status,
        rows=rows,
        elapsed_seconds=elapsed,
        error_type=error_type,
    )


def check_files(
    config: TableConfig,
    paths: Sequence[Path],
    error_log: ErrorLogBuffer | None = None,
) -> CheckResult:
    """Load every file against the table definition and aggregate results.

    Each file is independent: a failure is recorded and the next file is
    checked. The error log is flushed once at the end.
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    file_stats: list[FileStat] = []
    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            stat = _check_single_file(config, path, error_log)
            progress.record(stat)
            file_stats.append(stat)

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return CheckResult(
        success_files=progress.success,
        failed_files=progress.failed,
        total_rows=progress.rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
