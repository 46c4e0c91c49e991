from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress display with tqdm (TTY only).

A single tqdm bar over the row indices of the scanned sheet. In non-TTY
environments (CI, pipes, redirected logs) no bar is created so log output
stays free of control sequences.
"""

__all__ = [
    "RowProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class RowProgressTracker:
    """Progress bar over the rows of one scan."""

    def __init__(self, total_rows: int, *, description: str = "Scanning rows", enabled: bool = True) -> None:
        """Initialize progress tracker.

        Args:
            total_rows: Number of row indices the scan will visit
            description: Description for the progress bar
            enabled: Set False to suppress the bar even on a TTY
        """
        self.total_rows = total_rows
        self.description = description
        self.current_row = 0

        self.enabled = enabled and is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
                mininterval=1.0,
            )
        else:
            self.pbar = None

    def advance(self, row_index: int | None = None) -> None:
        """Mark one more row as handled (signature fits the scanner's on_row hook)."""
        self.current_row += 1
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)

    def set_postfix(self, **kwargs: Any) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
