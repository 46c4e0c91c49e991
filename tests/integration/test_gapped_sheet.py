from __future__ import annotations

from pathlib import Path

from conftest import write_xlsx
from prime_scanner.excel.reader import open_source
from prime_scanner.models.scan import PrimeHit, ScanConfig, SkipReason
from prime_scanner.services.row_scanner import scan

"""Sheets with structurally missing rows (no <row> element in the file)."""


def test_missing_rows_do_not_disturb_later_rows(temp_workdir: Path):
    path = write_xlsx(
        temp_workdir / "gaps.xlsx",
        {
            "Sheet1": {
                0: ["Index", "Number"],
                1: [1, 2],
                # 2, 3 missing
                4: [4, 17],
                # 5 missing
                6: [6, "29"],
                9: [9, 31],
            }
        },
    )
    skipped: list[tuple[int, SkipReason]] = []
    with open_source(path) as source:
        assert source.row_count() == 10
        hits = list(scan(source, ScanConfig(), on_skip=lambda i, r: skipped.append((i, r))))

    assert hits == [PrimeHit(2, 1), PrimeHit(17, 4), PrimeHit(29, 6), PrimeHit(31, 9)]
    assert [i for i, r in skipped if r is SkipReason.ABSENT_ROW] == [2, 3, 5, 7, 8]


def test_rows_after_last_physical_row_are_not_lost(temp_workdir: Path):
    # 物理行数ではなく最終行 index まで走査する
    path = write_xlsx(temp_workdir / "sparse.xlsx", {"S": {0: [0, 3], 50: [50, 53]}})
    with open_source(path) as source:
        hits = list(scan(source, ScanConfig()))
    assert hits == [PrimeHit(3, 0), PrimeHit(53, 50)]
