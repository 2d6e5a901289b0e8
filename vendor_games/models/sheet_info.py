from __future__ import annotations

from dataclasses import dataclass

"""SheetInfo model: one discovered sheet of an uploaded workbook."""

__all__ = [
    "SheetInfo",
]


@dataclass(frozen=True)
class SheetInfo:
    """Discovery result for a single sheet.

    vendor_code already falls back to the sheet name when the sheet carries no
    ``Vendor Code`` label. ``selected`` defaults to True, matching the initial
    state of a freshly uploaded workbook.
    """
    name: str
    vendor_code: str
    wallet_code: str | None = None
    selected: bool = True

    @property
    def vendor_key(self) -> str:
        """Key used for vendor configs (trimmed vendor code)."""
        return (self.vendor_code or self.name).strip()
