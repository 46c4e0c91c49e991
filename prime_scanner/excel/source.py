from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any, Protocol

from ..models.row import Row

"""Tabular source contract and the forward-only base implementation.

The scanner only needs two operations from a source: how many row indices
exist (gaps included) and the row at a given index, or None when the row is
structurally missing. Concrete readers stream their file and expose it
through StreamingSource, which turns a forward iterator into get_row().
"""

__all__ = [
    "SourceError",
    "SourceOpenError",
    "SourceReadError",
    "TabularSource",
    "StreamingSource",
]


class SourceError(Exception):
    """Base class for fatal tabular source failures."""


class SourceOpenError(SourceError):
    """Raised when the file cannot be opened (missing, corrupt, bad sheet)."""


class SourceReadError(SourceError):
    """Raised when reading fails after the source was opened."""


class TabularSource(Protocol):
    def row_count(self) -> int: ...

    def get_row(self, index: int) -> Row | None: ...


class StreamingSource:
    """Forward-only TabularSource over a lazily produced row iterator.

    Subclasses implement _open(), _close(), row_count() and _iter_rows().
    _iter_rows() yields ``Row | None`` for indices 0, 1, 2, ... in order.
    get_row() must be called with non-decreasing indices; going back raises
    SourceReadError since the underlying stream is not restartable.
    """

    def __init__(self, path: Path, sheet_index: int = 0) -> None:
        self.path = Path(path)
        self.sheet_index = sheet_index
        self._rows: Iterator[Row | None] | None = None
        self._position = 0  # 次に _rows から出てくる index
        self._exhausted = False
        self._opened = False

    # -- lifecycle -------------------------------------------------------
    def _open(self) -> None:
        raise NotImplementedError

    def _close(self) -> None:
        raise NotImplementedError

    def _iter_rows(self) -> Iterator[Row | None]:
        raise NotImplementedError

    def row_count(self) -> int:
        raise NotImplementedError

    def open(self) -> StreamingSource:
        if not self._opened:
            self._open()
            self._opened = True
        return self

    def close(self) -> None:
        if self._opened:
            self._opened = False
            self._rows = None
            self._close()

    def __enter__(self) -> StreamingSource:
        return self.open()

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # -- access ----------------------------------------------------------
    def get_row(self, index: int) -> Row | None:
        if not self._opened:
            raise SourceReadError(f"source not opened: {self.path}")
        if index < self._position:
            raise SourceReadError(
                f"row {index} already consumed (forward-only source at row {self._position})"
            )
        if self._exhausted:
            return None
        if self._rows is None:
            self._rows = self._iter_rows()
        row: Row | None = None
        while self._position <= index:
            try:
                row = next(self._rows)
            except StopIteration:
                self._exhausted = True
                return None
            self._position += 1
        return row
