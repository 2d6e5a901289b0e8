from __future__ import annotations

import math
import re
from collections.abc import Sequence

from ..models.game_record import CellValue

"""Header normalization, header row location and column mapping.

Spreadsheet headers are loosely formatted ("Game Code", "GAME  CODE ", "game\\ncode").
Every lookup goes through ``normalize_header`` which trims, lowercases and removes
all whitespace so those variants compare equal as ``gamecode``.
"""

__all__ = [
    "GAME_CODE_KEY",
    "cell_text",
    "is_empty_cell",
    "is_blank_row",
    "normalize_header",
    "normalize_label",
    "locate_header_row",
    "build_column_map",
]

GAME_CODE_KEY = "gamecode"

_WHITESPACE_RE = re.compile(r"\s+")
_LABEL_COLONS = ":："  # ASCII / 全角コロン


def cell_text(value: CellValue) -> str:
    """Return the string form of a cell value.

    None becomes an empty string, integral floats drop their ``.0`` and booleans
    are lowercased, so numeric cells read the same way a spreadsheet displays them.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def is_empty_cell(value: CellValue) -> bool:
    """Absent, None, empty string or a NaN float. Whitespace and 0 count as content."""
    if isinstance(value, float) and math.isnan(value):
        return True
    return value is None or value == ""


def is_blank_row(row: Sequence[CellValue]) -> bool:
    return all(is_empty_cell(c) for c in row)


def normalize_header(raw: CellValue) -> str:
    """Canonical comparison key: trimmed, lowercased, all whitespace removed."""
    return _WHITESPACE_RE.sub("", cell_text(raw).strip().lower())


def normalize_label(raw: CellValue) -> str:
    """Like normalize_header but also strips a trailing colon (``Vendor Code:``)."""
    return normalize_header(raw).rstrip(_LABEL_COLONS)


def locate_header_row(sheet: Sequence[Sequence[CellValue]]) -> int | None:
    """Index of the first row holding a cell that normalizes to ``gamecode``.

    Returns None when no such row exists.
    """
    for idx, row in enumerate(sheet):
        if any(normalize_header(cell) == GAME_CODE_KEY for cell in row):
            return idx
    return None


def build_column_map(header_row: Sequence[CellValue]) -> dict[str, int]:
    """Map canonical header keys to column indexes.

    Blank headers are ignored. When a key repeats, the last column wins.
    """
    column_map: dict[str, int] = {}
    for idx, cell in enumerate(header_row):
        key = normalize_header(cell)
        if key:
            column_map[key] = idx
    return column_map
