"""Tabular sources: streaming spreadsheet and CSV readers."""

from .csv_reader import CsvSource
from .reader import XlsxSource, create_source, open_source, preview_rows, sheet_names
from .source import SourceError, SourceOpenError, SourceReadError, StreamingSource, TabularSource

__all__ = [
    "CsvSource",
    "XlsxSource",
    "create_source",
    "open_source",
    "preview_rows",
    "sheet_names",
    "SourceError",
    "SourceOpenError",
    "SourceReadError",
    "StreamingSource",
    "TabularSource",
]
