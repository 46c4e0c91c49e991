from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any
from xml.etree.ElementTree import ParseError

import pandas as pd
from openpyxl import load_workbook
from openpyxl.cell.read_only import ReadOnlyCell
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet._reader import WorkSheetParser

from ..models.cell_value import CellValue
from ..models.row import Row
from .csv_reader import CsvSource
from .source import SourceOpenError, SourceReadError, StreamingSource

"""Spreadsheet reader.

XlsxSource streams one worksheet with openpyxl in read-only mode, so only the
current row is materialized regardless of sheet size. Formulas are read as
formulas (data_only=False), never as their cached results.

open_source() picks the reader from the file suffix and guarantees the file
handle is released.

preview_rows() / sheet_names() back the CLI --inspect mode and read through
pandas; they only touch the first few rows.
"""

__all__ = [
    "XLSX_SUFFIXES",
    "CSV_SUFFIXES",
    "XlsxSource",
    "create_source",
    "open_source",
    "preview_rows",
    "sheet_names",
]

logger = logging.getLogger(__name__)

XLSX_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xltx", ".xltm"})
CSV_SUFFIXES = frozenset({".csv"})

# openpyxl が壊れたファイルで投げ得る例外
_WORKBOOK_ERRORS = (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, ParseError)


class XlsxSource(StreamingSource):
    """Forward-only source over one worksheet of an .xlsx workbook."""

    def __init__(self, path: Path, sheet_index: int = 0) -> None:
        super().__init__(path, sheet_index)
        self._workbook: Any = None
        self._sheet: Any = None

    def _open(self) -> None:
        if not self.path.exists():
            raise SourceOpenError(f"file not found: {self.path}")
        try:
            self._workbook = load_workbook(self.path, read_only=True, data_only=False)
        except _WORKBOOK_ERRORS as e:
            raise SourceOpenError(f"cannot open workbook {self.path}: {e}") from e
        worksheets = self._workbook.worksheets
        if self.sheet_index >= len(worksheets):
            self._workbook.close()
            self._workbook = None
            raise SourceOpenError(
                f"sheet index {self.sheet_index} out of range ({len(worksheets)} sheets in {self.path.name})"
            )
        self._sheet = worksheets[self.sheet_index]
        logger.debug("Opened workbook %s sheet=%s", self.path.name, self._sheet.title)

    def _close(self) -> None:
        if self._workbook is not None:
            self._workbook.close()
        self._workbook = None
        self._sheet = None

    def row_count(self) -> int:
        if self._sheet is None:
            raise SourceReadError(f"source not opened: {self.path}")
        if self._sheet.max_row is None:
            # dimension 情報が無いシートは一度走査して確定させる
            try:
                self._sheet.calculate_dimension(force=True)
            except _WORKBOOK_ERRORS as e:
                raise SourceReadError(f"cannot size sheet in {self.path}: {e}") from e
        return self._sheet.max_row or 0

    def _iter_rows(self) -> Iterator[Row | None]:
        sheet, workbook = self._sheet, self._workbook
        index = 0
        try:
            # ReadOnlyWorksheet.iter_rows と同じパーサ。ただし <row> 要素の無い行は
            # EMPTY_CELL で埋めず None にする (空の <row/> は存在する行として返す)
            with sheet._get_source() as src:
                parser = WorkSheetParser(
                    src,
                    sheet._shared_strings,
                    data_only=workbook.data_only,
                    epoch=workbook.epoch,
                    date_formats=workbook._date_formats,
                    timedelta_formats=workbook._timedelta_formats,
                )
                for row_number, cells in parser.parse():
                    position = row_number - 1
                    while index < position:
                        yield None
                        index += 1
                    if position < index:
                        # 行番号が重複・逆順のファイルは後から来た行を無視
                        continue
                    yield Row(index=index, cells=_row_cells(sheet, cells))
                    index += 1
        except _WORKBOOK_ERRORS as e:
            raise SourceReadError(f"failed reading row {index} of {self.path}: {e}") from e


def _row_cells(sheet: Any, cells: list[dict[str, Any]]) -> tuple[CellValue, ...]:
    """Place parsed cells by column; columns without a <c> element are absent."""
    width = max((c["column"] for c in cells), default=0)
    values = [CellValue.absent()] * width
    for cell in cells:
        values[cell["column"] - 1] = CellValue.from_cell(ReadOnlyCell(sheet, **cell))
    return tuple(values)


def create_source(path: Path, sheet_index: int = 0) -> StreamingSource:
    """Return an unopened source for ``path`` chosen by its suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in XLSX_SUFFIXES:
        return XlsxSource(path, sheet_index)
    if suffix in CSV_SUFFIXES:
        return CsvSource(path, sheet_index)
    raise SourceOpenError(f"unsupported file type: {path.name}")


@contextmanager
def open_source(path: Path, sheet_index: int = 0) -> Iterator[StreamingSource]:
    """Open a tabular source and close it however the caller's block exits."""
    source = create_source(path, sheet_index)
    source.open()
    try:
        yield source
    finally:
        source.close()


def sheet_names(path: Path) -> list[str]:
    path = Path(path)
    if path.suffix.lower() in CSV_SUFFIXES:
        return [path.stem]
    try:
        with pd.ExcelFile(path) as xls:
            return [str(name) for name in xls.sheet_names]
    except _WORKBOOK_ERRORS as e:
        raise SourceOpenError(f"cannot open workbook {path}: {e}") from e


def preview_rows(path: Path, sheet_index: int = 0, nrows: int = 5) -> list[list[Any]]:
    """Read the first ``nrows`` raw rows of a sheet (no header handling)."""
    path = Path(path)
    suffix = path.suffix.lower()
    try:
        if suffix in CSV_SUFFIXES:
            df = pd.read_csv(
                path, header=None, nrows=nrows, dtype=str,
                keep_default_na=False, skip_blank_lines=False,
            )
        elif suffix in XLSX_SUFFIXES:
            df = pd.read_excel(path, sheet_name=sheet_index, header=None, nrows=nrows)
        else:
            raise SourceOpenError(f"unsupported file type: {path.name}")
    except pd.errors.EmptyDataError:
        return []
    except (IndexError, *_WORKBOOK_ERRORS) as e:
        raise SourceOpenError(f"cannot preview {path}: {e}") from e
    # NaN -> None
    return df.astype(object).where(pd.notna(df), None).values.tolist()
