from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from ..models.row import Row
from ..models.scan import PrimeHit, ScanConfig, SkipReason
from .cell_validator import coerce_cell, is_valid_cell
from .primality import is_prime

if TYPE_CHECKING:
    from ..excel.source import TabularSource

"""Row scanning: the streaming core of the prime scanner.

scan() walks the rows of a tabular source in ascending index order, one row
at a time, and yields a PrimeHit for every row whose target cell holds a
prime. It is a generator: nothing is buffered, the caller consumes hits as
they appear and may stop at any point.

Row-level problems (missing row, invalid cell, coercion failure) never raise;
they are reported through the optional ``on_skip`` callback and DEBUG log
lines only. Errors raised by the source itself propagate to the caller.
"""

__all__ = [
    "SkipCallback",
    "evaluate_row",
    "scan",
    "scan_with_callback",
]

logger = logging.getLogger(__name__)

SkipCallback = Callable[[int, SkipReason], None]


def _skip(on_skip: SkipCallback | None, row_index: int, reason: SkipReason) -> None:
    if on_skip is not None:
        on_skip(row_index, reason)


def evaluate_row(
    row: Row,
    column_index: int,
    on_skip: SkipCallback | None = None,
) -> PrimeHit | None:
    """Decide whether one row yields a prime.

    Extracts the cell at ``column_index``, validates it, coerces it to a
    64-bit integer and tests primality. Returns the hit, or None when the
    row has nothing to report. The result depends on the row content only.
    """
    cell = row.cell_at(column_index)
    logger.debug("Processing cell of type: %s", cell.kind.name)
    if not is_valid_cell(cell):
        logger.debug(
            "Invalid cell value, skipping row: %d (possibly header or non-numeric value)",
            row.index,
        )
        _skip(on_skip, row.index, SkipReason.INVALID_CELL)
        return None

    number = coerce_cell(cell)
    if number is None:
        logger.debug("Failed to parse number at row: %d, skipping this row", row.index)
        _skip(on_skip, row.index, SkipReason.COERCION_FAILED)
        return None

    if not is_prime(number):
        _skip(on_skip, row.index, SkipReason.NOT_PRIME)
        return None
    return PrimeHit(value=number, row_index=row.index)


def scan(
    source: TabularSource,
    config: ScanConfig,
    *,
    on_skip: SkipCallback | None = None,
    on_row: Callable[[int], None] | None = None,
) -> Iterator[PrimeHit]:
    """Lazily yield the primes found in ``config.column_index``.

    Rows are requested from ``source`` in ascending order exactly once. The
    returned iterator is single use: it is tied to the one traversal of the
    source, a second scan needs a freshly opened source.

    Args:
        source: Opened tabular source (row_count / get_row)
        config: Sheet / column / header-skip settings
        on_skip: Called with (row_index, reason) for every row without a hit
        on_row: Called with the row index after each index is handled
    """
    row_count = source.row_count()
    logger.debug("Scanning %d rows (column=%d)", row_count, config.column_index)
    for index in range(row_count):
        hit: PrimeHit | None = None
        row = source.get_row(index)
        if row is None:
            logger.debug("Null row at index: %d", index)
            _skip(on_skip, index, SkipReason.ABSENT_ROW)
        elif index < config.header_rows:
            logger.debug("Header row skipped: %d", index)
            _skip(on_skip, index, SkipReason.HEADER_ROW)
        else:
            hit = evaluate_row(row, config.column_index, on_skip)
        # on_row before yielding so a consumer stopping at this hit still sees the row counted
        if on_row is not None:
            on_row(index)
        if hit is not None:
            yield hit


def scan_with_callback(
    source: TabularSource,
    config: ScanConfig,
    on_prime: Callable[[int, int], None],
    *,
    on_skip: SkipCallback | None = None,
    on_row: Callable[[int], None] | None = None,
) -> int:
    """Push-style scan: call ``on_prime(value, row_index)`` per prime found.

    Returns the number of primes reported.
    """
    found = 0
    for hit in scan(source, config, on_skip=on_skip, on_row=on_row):
        on_prime(hit.value, hit.row_index)
        found += 1
    return found
