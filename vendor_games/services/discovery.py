from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from ..models.config_models import VendorConfig
from ..models.game_record import Grid
from ..models.sheet_info import SheetInfo
from .metadata import scan_metadata

"""Sheet discovery and vendor config seeding.

After a workbook is decoded every non-empty sheet is listed with the vendor /
wallet code found in it, all sheets start selected, and each distinct vendor
gets a default image prefix (its lowercased key). The user may then narrow the
selection and override prefixes before converting.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "NoUsableSheetsError",
    "discover_sheets",
    "seed_vendor_configs",
    "select_sheets",
]


class NoUsableSheetsError(Exception):
    """Raised when a decoded workbook has no non-empty sheet."""


def discover_sheets(workbook: Mapping[str, Grid]) -> list[SheetInfo]:
    """List non-empty sheets in workbook order with their metadata."""
    sheets: list[SheetInfo] = []
    for name, grid in workbook.items():
        if not grid:
            logger.debug(f"sheet={name} is empty -> not listed")
            continue
        meta = scan_metadata(grid)
        sheets.append(
            SheetInfo(
                name=name,
                vendor_code=meta.vendor_code or name,
                wallet_code=meta.wallet_code or None,
            )
        )
    if not sheets:
        raise NoUsableSheetsError("No usable sheets found in this file.")
    return sheets


def seed_vendor_configs(
    sheets: Iterable[SheetInfo],
    overrides: Mapping[str, str] | None = None,
) -> dict[str, VendorConfig]:
    """Default prefix per vendor key, then apply user overrides.

    Overrides for vendor keys that were not discovered are kept as-is.
    """
    configs: dict[str, VendorConfig] = {}
    for sheet in sheets:
        key = sheet.vendor_key
        if key not in configs:
            configs[key] = VendorConfig(prefix=key.lower())
    for key, prefix in (overrides or {}).items():
        configs[key.strip()] = VendorConfig(prefix=prefix)
    return configs


def select_sheets(sheets: Sequence[SheetInfo], names: Sequence[str] | None = None) -> list[str]:
    """Names of the sheets to convert, in conversion order.

    Without explicit names the selected sheets are used in workbook order. With
    names, the given order wins; names not in the workbook are passed through so
    the batch can report them.
    """
    if not names:
        return [s.name for s in sheets if s.selected]
    known = {s.name for s in sheets}
    for name in names:
        if name not in known:
            logger.warning(f"selected sheet not found in workbook: {name}")
    # 重複指定は最初の 1 回のみ
    return list(dict.fromkeys(names))
