from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .game_record import GameRecord

"""VendorBundle / ExportDocument models.

A VendorBundle holds the games converted from one sheet. The ExportDocument is
the top-level JSON payload: ``{"vendors": [...]}``.
"""

__all__ = [
    "SheetMetadata",
    "VendorBundle",
    "ExportDocument",
]


@dataclass(frozen=True)
class SheetMetadata:
    """Labeled values found anywhere in a sheet (``Vendor Code:``, ``Wallet Code:``)."""
    vendor_code: str | None = None
    wallet_code: str | None = None


@dataclass(frozen=True)
class VendorBundle:
    """Converted games of a single sheet.

    Every game carries the bundle's vendor_code. export_date is shared by all
    bundles of one batch.
    """
    vendor_code: str
    wallet_code: str | None
    export_date: str  # ISO8601 UTC
    games: list[GameRecord] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return len(self.games)

    def to_dict(self) -> dict[str, Any]:
        return {
            "vendorCode": self.vendor_code,
            "walletCode": self.wallet_code,
            "exportDate": self.export_date,
            "totalGames": self.total_games,
            "games": [g.to_dict() for g in self.games],
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> VendorBundle:
        return VendorBundle(
            vendor_code=data["vendorCode"],
            wallet_code=data.get("walletCode"),
            export_date=data["exportDate"],
            games=[GameRecord.from_dict(g) for g in data.get("games", [])],
        )


@dataclass(frozen=True)
class ExportDocument:
    """Root export payload, one bundle per converted sheet in selection order."""
    vendors: list[VendorBundle] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return sum(v.total_games for v in self.vendors)

    def to_dict(self) -> dict[str, Any]:
        return {"vendors": [v.to_dict() for v in self.vendors]}

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ExportDocument:
        return ExportDocument(vendors=[VendorBundle.from_dict(v) for v in data.get("vendors", [])])

    @staticmethod
    def from_json(text: str) -> ExportDocument:
        return ExportDocument.from_dict(json.loads(text))
