from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

"""Scan configuration, results and run statistics.

ScanConfig is fixed for the whole scan. A scan produces PrimeHit values one
at a time (``None`` stands for "no result" on a row); nothing here collects
them. ScanStats only counts, so memory stays flat for any sheet size.
"""

__all__ = [
    "ScanConfig",
    "PrimeHit",
    "SkipReason",
    "ScanStats",
    "ScanSummary",
]


@dataclass(frozen=True)
class ScanConfig:
    """Which sheet and column to scan.

    ``header_rows`` skips that many leading rows by index. The default 0
    judges every row purely by its cell content, so a numeric header in the
    target column is treated like data.
    """
    sheet_index: int = 0
    column_index: int = 1
    header_rows: int = 0

    def __post_init__(self) -> None:
        for name in ("sheet_index", "column_index", "header_rows"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class PrimeHit:
    """A prime found in the target column of row ``row_index``."""
    value: int
    row_index: int


class SkipReason(Enum):
    """Why a row produced no result."""
    ABSENT_ROW = "absent_row"
    HEADER_ROW = "header_row"
    INVALID_CELL = "invalid_cell"
    COERCION_FAILED = "coercion_failed"
    NOT_PRIME = "not_prime"


@dataclass(frozen=True)
class ScanSummary:
    """Final counters of one scan, rendered as the SUMMARY line."""
    rows_scanned: int
    primes_found: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float
    skipped_by_reason: dict[str, int] = field(default_factory=dict)


class ScanStats:
    """Running counters fed by the scanner's ``on_row`` / ``on_skip`` hooks."""

    def __init__(self) -> None:
        self.rows_scanned = 0
        self.primes_found = 0
        self.skipped: Counter[SkipReason] = Counter()

    def record_row(self, row_index: int) -> None:
        self.rows_scanned += 1

    def record_skip(self, row_index: int, reason: SkipReason) -> None:
        self.skipped[reason] += 1

    def record_prime(self, hit: PrimeHit) -> None:
        self.primes_found += 1

    @property
    def skipped_rows(self) -> int:
        return sum(self.skipped.values())

    def summarize(self, start_time: datetime, end_time: datetime) -> ScanSummary:
        elapsed = (end_time - start_time).total_seconds()
        # ゼロ除算回避
        throughput = self.rows_scanned / elapsed if elapsed > 0 else 0.0
        return ScanSummary(
            rows_scanned=self.rows_scanned,
            primes_found=self.primes_found,
            skipped_rows=self.skipped_rows,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=elapsed,
            throughput_rows_per_sec=throughput,
            skipped_by_reason={r.value: n for r, n in self.skipped.items()},
        )
