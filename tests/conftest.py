# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest
from openpyxl import Workbook

from prime_scanner.excel.source import SourceReadError
from prime_scanner.models.row import Row

# 仕様のシナリオ: index -> [Index, Number]
SCENARIO_ROWS: list[list[object]] = [
    ["Index", "Number"],  # header
    [1, 2],    # prime
    [2, 4],    # not prime
    [3, 17],   # prime
    [4, 20],   # not prime
    [5, 23],   # prime
    [6, "Invalid"],  # invalid
    [7, -7],   # invalid
]


class InMemorySource:
    """TabularSource over a dict of row index -> cell values.

    Indices missing from ``rows`` are structurally absent. Every get_row call
    is recorded so tests can check ordering and laziness. ``fail_at`` makes
    get_row raise SourceReadError at that index.
    """

    def __init__(self, rows: dict[int, Iterable[Any]], row_count: int | None = None, fail_at: int | None = None):
        self._rows = {i: list(v) for i, v in rows.items()}
        self._row_count = row_count if row_count is not None else (max(rows) + 1 if rows else 0)
        self.fail_at = fail_at
        self.requested: list[int] = []

    def row_count(self) -> int:
        return self._row_count

    def get_row(self, index: int) -> Row | None:
        self.requested.append(index)
        if self.fail_at is not None and index == self.fail_at:
            raise SourceReadError(f"simulated read failure at row {index}")
        values = self._rows.get(index)
        if values is None:
            return None
        return Row.from_values(index, values)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("PRIME_SCANNER_CONFIG", raising=False)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def make_source():
    return InMemorySource


@pytest.fixture()
def scenario_source() -> InMemorySource:
    return InMemorySource(dict(enumerate(SCENARIO_ROWS)))


def write_xlsx(path: Path, sheets: dict[str, dict[int, list[object]]]) -> Path:
    """Write a workbook with openpyxl; rows keyed by zero-based index (gaps stay absent)."""
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for index, values in rows.items():
            for col, value in enumerate(values, start=1):
                if value is not None:
                    ws.cell(row=index + 1, column=col, value=value)
    wb.save(path)
    return path


def make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write contiguous rows through pandas (no header, no index)."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def scenario_xlsx(temp_workdir: Path) -> Path:
    return make_excel(temp_workdir / "data" / "primes.xlsx", {"Numbers": SCENARIO_ROWS})


@pytest.fixture()
def sample_config_yaml() -> str:
    return """sheet_index: 0
column_index: 1
header_rows: 0
max_primes: null
progress: false
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "prime_scanner.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
