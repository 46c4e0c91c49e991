from __future__ import annotations

import time
from pathlib import Path

from openpyxl import Workbook

from prime_scanner.excel.reader import open_source
from prime_scanner.models.scan import ScanConfig, ScanStats
from prime_scanner.services.primality import is_prime
from prime_scanner.services.row_scanner import scan

"""Streaming smoke test over a few thousand rows (lenient timing)."""

ROWS = 5_000


def test_streaming_scan_smoke(temp_workdir: Path):
    path = temp_workdir / "big.xlsx"
    wb = Workbook()
    ws = wb.active
    ws.append(["Index", "Number"])
    for i in range(1, ROWS + 1):
        ws.append([i, i])
    wb.save(path)

    stats = ScanStats()
    start = time.perf_counter()
    with open_source(path) as source:
        found = sum(1 for _ in scan(source, ScanConfig(), on_row=stats.record_row))
    elapsed = time.perf_counter() - start

    assert found == sum(1 for n in range(1, ROWS + 1) if is_prime(n))
    assert found == 669
    assert stats.rows_scanned == ROWS + 1
    assert elapsed < 30, f"scan too slow: {elapsed:.3f}s"
