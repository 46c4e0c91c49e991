"""Domain models for the prime scanner.

Cell and row representations handed over by tabular sources, plus the scan
configuration, per-row results and run statistics.
"""

from .cell_value import CellKind, CellValue
from .row import Row
from .scan import PrimeHit, ScanConfig, ScanStats, ScanSummary, SkipReason

__all__ = [
    # Cell / row models
    "CellKind",
    "CellValue",
    "Row",
    # Scan models
    "PrimeHit",
    "ScanConfig",
    "ScanStats",
    "ScanSummary",
    "SkipReason",
]
