from __future__ import annotations

from ..models.run_result import RunResult

"""SUMMARY line rendering for an analysis run."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(total_files: int, result: RunResult) -> str:
    """Render the SUMMARY line of a run.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed} sheets={sheets}
    skipped_sheets={skipped} records={records} quality={quality} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2023, 1, 1, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     success_files=1, failed_files=0, analyzed_sheets=2, skipped_sheets=0,
        ...     total_records=120, average_quality=97, start_time=t, end_time=t,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 sheets=2 skipped_sheets=0 records=120 quality=97 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"sheets={result.analyzed_sheets} "
        f"skipped_sheets={result.skipped_sheets} "
        f"records={result.total_records} "
        f"quality={result.average_quality} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
