from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import closing
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import AppConfig
from ..excel.reader import open_source
from ..models.scan import PrimeHit, ScanStats, ScanSummary
from .progress import RowProgressTracker
from .row_scanner import scan

"""Scan orchestration.

run_scan() ties the pieces together for one file: open the source, drive the
row scanner, log every prime the moment it is found, keep the running
counters and progress bar, and return the ScanSummary. The source is closed
on every exit path (exhaustion, --max-primes stop, exception).
"""

__all__ = [
    "run_scan",
]

logger = logging.getLogger(__name__)


def run_scan(
    path: Path,
    config: AppConfig,
    *,
    on_prime: Callable[[PrimeHit], None] | None = None,
) -> ScanSummary:
    """Scan ``path`` and report primes as they are found.

    Args:
        path: .xlsx / .csv file to scan
        config: Effective application config (scan settings, limit, progress)
        on_prime: Extra sink invoked once per prime after it is logged

    Returns:
        ScanSummary with row / prime / skip counters and timing

    Raises:
        SourceError: the file cannot be opened or read
    """
    start_time = datetime.now(UTC)
    stats = ScanStats()
    scan_cfg = config.scan

    with open_source(path, scan_cfg.sheet_index) as source:
        total_rows = source.row_count()
        logger.info(
            f"Scanning {Path(path).name} sheet={scan_cfg.sheet_index} "
            f"column={scan_cfg.column_index} rows={total_rows}"
        )
        with RowProgressTracker(total_rows, enabled=config.progress) as progress:

            def _on_row(index: int) -> None:
                stats.record_row(index)
                progress.advance(index)

            hits = scan(source, scan_cfg, on_skip=stats.record_skip, on_row=_on_row)
            with closing(hits):
                for hit in hits:
                    stats.record_prime(hit)
                    logger.info(f"FOUND PRIME: {hit.value} row={hit.row_index}")
                    if on_prime is not None:
                        on_prime(hit)
                    progress.set_postfix(primes=stats.primes_found)
                    if config.max_primes is not None and stats.primes_found >= config.max_primes:
                        logger.info(f"max_primes={config.max_primes} reached, stopping scan")
                        break

    end_time = datetime.now(UTC)
    return stats.summarize(start_time, end_time)
