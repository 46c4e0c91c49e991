from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from prime_scanner.models.scan import PrimeHit, ScanConfig, ScanStats, SkipReason


def test_scan_config_defaults():
    cfg = ScanConfig()
    assert cfg.sheet_index == 0
    assert cfg.column_index == 1
    assert cfg.header_rows == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sheet_index": -1},
        {"column_index": -2},
        {"header_rows": -1},
        {"column_index": 1.5},
        {"column_index": True},
    ],
)
def test_scan_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        ScanConfig(**kwargs)


def test_scan_config_is_frozen():
    cfg = ScanConfig()
    with pytest.raises(AttributeError):
        cfg.column_index = 3  # type: ignore[misc]


def test_prime_hit_equality():
    assert PrimeHit(17, 3) == PrimeHit(value=17, row_index=3)
    assert PrimeHit(17, 3) != PrimeHit(17, 4)


def test_scan_stats_summarize():
    stats = ScanStats()
    for i in range(8):
        stats.record_row(i)
    stats.record_prime(PrimeHit(2, 1))
    stats.record_skip(0, SkipReason.INVALID_CELL)
    stats.record_skip(2, SkipReason.NOT_PRIME)
    stats.record_skip(4, SkipReason.NOT_PRIME)

    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    summary = stats.summarize(start, start + timedelta(seconds=2))

    assert summary.rows_scanned == 8
    assert summary.primes_found == 1
    assert summary.skipped_rows == 3
    assert summary.elapsed_seconds == 2.0
    assert summary.throughput_rows_per_sec == 4.0
    assert summary.skipped_by_reason == {"invalid_cell": 1, "not_prime": 2}


def test_scan_stats_zero_elapsed():
    stats = ScanStats()
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    summary = stats.summarize(start, start)
    assert summary.throughput_rows_per_sec == 0.0
    assert summary.skipped_rows == 0
