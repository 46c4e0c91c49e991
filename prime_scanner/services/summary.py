from __future__ import annotations

from ..models.scan import ScanSummary

"""SUMMARY line rendering.

Format:
    SUMMARY rows={rows} primes={primes} skipped={skipped} elapsed_sec={elapsed} throughput_rps={rps}
"""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for tiny values
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(summary: ScanSummary) -> str:
    """Render the SUMMARY line for a finished scan.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> s = ScanSummary(
        ...     rows_scanned=8, primes_found=3, skipped_rows=5,
        ...     start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=4.0,
        ... )
        >>> render_summary_line(s)
        'SUMMARY rows=8 primes=3 skipped=5 elapsed_sec=2 throughput_rps=4'
    """
    return (
        f"SUMMARY rows={summary.rows_scanned} "
        f"primes={summary.primes_found} "
        f"skipped={summary.skipped_rows} "
        f"elapsed_sec={_format_number(summary.elapsed_seconds)} "
        f"throughput_rps={_format_number(summary.throughput_rows_per_sec)}"
    )
