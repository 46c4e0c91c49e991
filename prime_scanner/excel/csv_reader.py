from __future__ import annotations

import csv
from collections.abc import Iterator
from pathlib import Path
from typing import IO, Any

from ..models.cell_value import CellValue
from ..models.row import Row
from .source import SourceOpenError, SourceReadError, StreamingSource

"""CSV reader: a single-sheet tabular source.

Every non-empty field is textual, an empty field is an absent cell and a
blank line is an absent row, so row indices match physical line records.
"""

__all__ = [
    "CsvSource",
]

ENCODING = "utf-8-sig"


class CsvSource(StreamingSource):
    """Forward-only source over a CSV file (sheet index 0 only)."""

    def __init__(self, path: Path, sheet_index: int = 0) -> None:
        super().__init__(path, sheet_index)
        self._handle: IO[str] | None = None
        self._row_count: int | None = None

    def _open(self) -> None:
        if self.sheet_index != 0:
            raise SourceOpenError(f"CSV file has a single sheet, got index {self.sheet_index}")
        try:
            self._handle = self.path.open("r", encoding=ENCODING, newline="")
        except OSError as e:
            raise SourceOpenError(f"cannot open {self.path}: {e}") from e

    def _close(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None

    def row_count(self) -> int:
        # 別ハンドルで件数だけ数える (行は保持しない)
        if self._row_count is None:
            try:
                with self.path.open("r", encoding=ENCODING, newline="") as f:
                    self._row_count = sum(1 for _ in csv.reader(f))
            except (OSError, UnicodeDecodeError, csv.Error) as e:
                raise SourceReadError(f"cannot count rows of {self.path}: {e}") from e
        return self._row_count

    def _iter_rows(self) -> Iterator[Row | None]:
        if self._handle is None:
            raise SourceReadError(f"source not opened: {self.path}")
        reader = csv.reader(self._handle)
        index = 0
        try:
            for fields in reader:
                if not fields:
                    yield None
                else:
                    yield Row(index=index, cells=tuple(_to_cell(f) for f in fields))
                index += 1
        except (UnicodeDecodeError, csv.Error) as e:
            raise SourceReadError(f"failed reading row {index} of {self.path}: {e}") from e


def _to_cell(field: Any) -> CellValue:
    if field == "":
        return CellValue.absent()
    return CellValue.textual(field)
