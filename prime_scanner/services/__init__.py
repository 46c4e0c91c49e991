"""Core services: validation, primality, row scanning and run reporting."""

from .cell_validator import coerce_cell, is_valid_cell
from .primality import is_prime
from .row_scanner import evaluate_row, scan, scan_with_callback

__all__ = [
    "coerce_cell",
    "is_valid_cell",
    "is_prime",
    "evaluate_row",
    "scan",
    "scan_with_callback",
]
