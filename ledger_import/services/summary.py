from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering."""


def _format_number(value: float) -> str:
    # Integers without decimals, tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for a batch run.

    Format:
    SUMMARY files={n} success={s} skipped={k} failed={f} records={r}
    elapsed_sec={elapsed} throughput_rps={throughput}

    >>> from datetime import datetime, timezone
    >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> render_summary_line(ProcessingResult(
    ...     success_files=2, skipped_files=1, failed_files=0, total_records=40,
    ...     start_time=t, end_time=t, elapsed_seconds=2.0, throughput_rows_per_sec=20.0))
    'SUMMARY files=3 success=2 skipped=1 failed=0 records=40 elapsed_sec=2 throughput_rps=20'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"success={result.success_files} "
        f"skipped={result.skipped_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
