from __future__ import annotations

from collections.abc import Sequence

from ..models.game_record import CellValue
from ..models.vendor_bundle import SheetMetadata
from .headers import cell_text, is_empty_cell, normalize_label

"""Metadata scanner: finds ``Vendor Code`` / ``Wallet Code`` label-value pairs.

The label and its value must sit in the same row; the value is the first
non-empty cell to the right of the label. Only the first occurrence of each
label counts, even if that occurrence has no value next to it.
"""

__all__ = [
    "VENDOR_CODE_TOKEN",
    "WALLET_CODE_TOKEN",
    "scan_metadata",
]

VENDOR_CODE_TOKEN = "vendorcode"
WALLET_CODE_TOKEN = "walletcode"


def _next_value(row: Sequence[CellValue], start: int) -> str | None:
    for cell in row[start + 1:]:
        if not is_empty_cell(cell):
            return cell_text(cell).strip() or None
    return None


def scan_metadata(sheet: Sequence[Sequence[CellValue]]) -> SheetMetadata:
    """Scan every row left-to-right for the vendor and wallet code labels."""
    found: dict[str, str | None] = {}
    for row in sheet:
        for j, cell in enumerate(row):
            if not cell:
                continue
            label = normalize_label(cell)
            for token in (WALLET_CODE_TOKEN, VENDOR_CODE_TOKEN):
                if token not in found and label.startswith(token):
                    found[token] = _next_value(row, j)
            if len(found) == 2:
                return SheetMetadata(
                    vendor_code=found[VENDOR_CODE_TOKEN],
                    wallet_code=found[WALLET_CODE_TOKEN],
                )
    return SheetMetadata(
        vendor_code=found.get(VENDOR_CODE_TOKEN),
        wallet_code=found.get(WALLET_CODE_TOKEN),
    )
