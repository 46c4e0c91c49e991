from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from prime_scanner.config.loader import AppConfig
from prime_scanner.excel.reader import XlsxSource
from prime_scanner.excel.source import SourceOpenError
from prime_scanner.models.scan import PrimeHit, ScanConfig
from prime_scanner.services.orchestrator import run_scan


def _config(**kwargs) -> AppConfig:
    return AppConfig(progress=False).with_overrides(**kwargs)


def test_run_scan_scenario(scenario_xlsx: Path):
    hits: list[PrimeHit] = []
    summary = run_scan(scenario_xlsx, _config(), on_prime=hits.append)

    assert hits == [PrimeHit(2, 1), PrimeHit(17, 3), PrimeHit(23, 5)]
    assert summary.rows_scanned == 8
    assert summary.primes_found == 3
    assert summary.skipped_rows == 5
    assert summary.skipped_by_reason == {"invalid_cell": 3, "not_prime": 2}
    assert summary.elapsed_seconds >= 0


def test_run_scan_header_rows(scenario_xlsx: Path):
    summary = run_scan(scenario_xlsx, _config(header_rows=1))
    assert summary.primes_found == 3
    assert summary.skipped_by_reason["header_row"] == 1
    assert summary.skipped_by_reason["invalid_cell"] == 2


def test_run_scan_max_primes_stops_early(scenario_xlsx: Path):
    hits: list[PrimeHit] = []
    summary = run_scan(scenario_xlsx, _config(max_primes=2), on_prime=hits.append)
    assert hits == [PrimeHit(2, 1), PrimeHit(17, 3)]
    assert summary.primes_found == 2
    # rows 0..3 handled, rows 4.. never requested
    assert summary.rows_scanned == 4


def test_run_scan_closes_source_on_early_stop(scenario_xlsx: Path):
    original = XlsxSource.close
    with patch.object(XlsxSource, "close", autospec=True, side_effect=original) as mock_close:
        run_scan(scenario_xlsx, _config(max_primes=1))
    mock_close.assert_called_once()


def test_run_scan_closes_source_when_sink_fails(scenario_xlsx: Path):
    def boom(hit: PrimeHit) -> None:
        raise RuntimeError("sink failure")

    original = XlsxSource.close
    with patch.object(XlsxSource, "close", autospec=True, side_effect=original) as mock_close:
        with pytest.raises(RuntimeError):
            run_scan(scenario_xlsx, _config(), on_prime=boom)
    mock_close.assert_called_once()


def test_run_scan_missing_file_is_fatal(temp_workdir: Path):
    with pytest.raises(SourceOpenError):
        run_scan(temp_workdir / "missing.xlsx", _config())


def test_run_scan_progress_tracker_receives_rows(scenario_xlsx: Path):
    with patch("prime_scanner.services.orchestrator.RowProgressTracker") as mock_tracker:
        tracker = mock_tracker.return_value.__enter__.return_value
        run_scan(scenario_xlsx, AppConfig(scan=ScanConfig()))
    mock_tracker.assert_called_once_with(8, enabled=True)
    assert tracker.advance.call_count == 8
    tracker.set_postfix.assert_called_with(primes=3)
