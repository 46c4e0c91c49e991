from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""CellValue model: the typed content of a single cell.

A cell is exactly one of four variants. Readers convert whatever their
library hands back into one of these so that validation only has to
dispatch on ``kind``:

- ABSENT: no cell at that position (row too short, blank cell)
- NUMERIC: a number, stored as float the way spreadsheets encode it
- TEXTUAL: a string, untouched (no trimming here)
- OTHER: booleans, dates, errors, formulas and anything else
"""

__all__ = [
    "CellKind",
    "CellValue",
]


class CellKind(Enum):
    ABSENT = "absent"
    NUMERIC = "numeric"
    TEXTUAL = "textual"
    OTHER = "other"


# openpyxl cell.data_type -> kind. 'inlineStr' は reader 側で 's' に正規化済み
_DATA_TYPE_KINDS = {
    "n": CellKind.NUMERIC,
    "s": CellKind.TEXTUAL,
}


@dataclass(frozen=True)
class CellValue:
    """Tagged value of one cell."""
    kind: CellKind
    value: Any = None

    @staticmethod
    def absent() -> CellValue:
        return _ABSENT

    @staticmethod
    def numeric(value: float) -> CellValue:
        return CellValue(CellKind.NUMERIC, float(value))

    @staticmethod
    def textual(value: str) -> CellValue:
        return CellValue(CellKind.TEXTUAL, value)

    @staticmethod
    def other(value: Any) -> CellValue:
        return CellValue(CellKind.OTHER, value)

    @staticmethod
    def from_value(raw: Any) -> CellValue:
        """Classify a plain Python value (CSV fields, pandas/openpyxl values_only)."""
        if raw is None:
            return _ABSENT
        # bool is a subclass of int: must be rejected before the numeric check
        if isinstance(raw, bool):
            return CellValue.other(raw)
        if isinstance(raw, (int, float)):
            return CellValue.numeric(raw)
        if isinstance(raw, str):
            return CellValue.textual(raw)
        return CellValue.other(raw)

    @staticmethod
    def from_cell(cell: Any) -> CellValue:
        """Classify an openpyxl (read-only) cell by its ``data_type`` tag.

        EmptyCell and cells whose value is None are absent. Unknown tags
        fall through to OTHER.
        """
        if cell is None:
            return _ABSENT
        value = getattr(cell, "value", None)
        if value is None:
            return _ABSENT
        kind = _DATA_TYPE_KINDS.get(getattr(cell, "data_type", None), CellKind.OTHER)
        if kind is CellKind.NUMERIC:
            # 日付書式の数値は reader が datetime に変換して 'd' になるが念のため型も確認
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return CellValue.other(value)
            return CellValue.numeric(value)
        if kind is CellKind.TEXTUAL:
            return CellValue.textual(str(value))
        return CellValue.other(value)


_ABSENT = CellValue(CellKind.ABSENT)
