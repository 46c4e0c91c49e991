"""Streaming prime number scanner for spreadsheet and CSV columns."""

__version__ = "0.1.0"
