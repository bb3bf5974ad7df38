from __future__ import annotations

from ..models.check_result import CheckResult

"""Summary line rendering service.

Format:
SUMMARY files={total}/{total} success={success} failed={failed} rows={rows} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: CheckResult) -> str:
    """Render a SUMMARY line from a CheckResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = CheckResult(
        ...     success_files=1, failed_files=1, total_rows=40,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=2/2 success=1 failed=1 rows=40 elapsed_sec=2'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
