from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .cell_value import CellValue

"""Row model for the prime scanner.

A Row is one physical row of the scanned sheet: its zero-based index and the
typed cells it holds. Rows live for a single iteration step; the scanner
never keeps a reference after moving on.
"""

__all__ = [
    "Row",
]


@dataclass(frozen=True)
class Row:
    """A single sheet row (zero-based ``index``) and its cells."""
    index: int
    cells: tuple[CellValue, ...] = ()

    @staticmethod
    def from_values(index: int, values: Iterable[Any]) -> Row:
        """Build a Row from plain Python values (see CellValue.from_value)."""
        return Row(index=index, cells=tuple(CellValue.from_value(v) for v in values))

    def cell_at(self, column: int) -> CellValue:
        """Return the cell at ``column`` (zero-based), absent when out of range."""
        if column < 0 or column >= len(self.cells):
            return CellValue.absent()
        return self.cells[column]
