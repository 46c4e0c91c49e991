from __future__ import annotations

import math
import re

from ..models.cell_value import CellKind, CellValue

"""Cell validation and integer coercion.

is_valid_cell() decides whether a cell holds a usable positive whole number.
It is a total predicate: every cell variant maps to True/False, and anything
not explicitly accepted is rejected.

coerce_cell() turns a valid cell into a signed 64-bit integer, or None when
that is not possible (out of range, unparseable).
"""

__all__ = [
    "INT64_MAX",
    "is_valid_cell",
    "coerce_cell",
]

INT64_MAX = 2**63 - 1

# ASCII digits only: "١٢" (Arabic-Indic) や全角数字は拒否
_DIGITS = re.compile(r"\d+", re.ASCII)


def _is_positive_whole(num: float) -> bool:
    # exact comparison against floor, no epsilon
    return math.isfinite(num) and num > 0 and num == math.floor(num)


def is_valid_cell(cell: CellValue | None) -> bool:
    """Return True if the cell represents a positive whole number.

    - absent / None: invalid
    - numeric: strictly positive and equal to its own floor
    - textual: after trimming, one or more ASCII digits with a value > 0
      (signs, decimal points and separators are all rejected)
    - anything else: invalid
    """
    if cell is None:
        return False
    if cell.kind is CellKind.NUMERIC:
        return _is_positive_whole(cell.value)
    if cell.kind is CellKind.TEXTUAL:
        text = cell.value.strip()
        if _DIGITS.fullmatch(text) is None:
            return False
        # > 0 without int(): very long digit strings hit int()'s max-digits limit
        return text.strip("0") != ""
    # ABSENT / OTHER
    return False


def coerce_cell(cell: CellValue) -> int | None:
    """Convert a validated cell to an int within the signed 64-bit range.

    Numeric cells truncate toward zero (exact once validation has passed);
    textual cells parse their trimmed digits. Returns None instead of raising
    when the value cannot be represented.
    """
    try:
        if cell.kind is CellKind.NUMERIC:
            number = int(cell.value)
        elif cell.kind is CellKind.TEXTUAL:
            number = int(cell.value.strip())
        else:
            return None
    except (ValueError, OverflowError, TypeError, AttributeError):
        return None
    if number > INT64_MAX or number < -INT64_MAX - 1:
        return None
    return number
