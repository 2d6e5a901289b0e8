from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

"""GameRecord model and cell value aliases.

A GameRecord is one converted spreadsheet row. Attribute names are snake_case;
``to_dict`` emits the camelCase keys the vendor-games API expects, always with
every key present (null when there is no value).
"""

__all__ = [
    "CellValue",
    "Grid",
    "GameRecord",
]

CellValue: TypeAlias = str | int | float | bool | None
Grid: TypeAlias = list[list[CellValue]]


@dataclass(frozen=True)
class GameRecord:
    """Normalized representation of a single game row."""
    vendor_code: str  # 所属 VendorBundle の vendorCode
    code: str  # ゲームコード (必須)
    name: str | None = None
    image: str | None = None
    category: str | None = None
    platform: CellValue = None
    rtp: CellValue = None
    update_date: CellValue = None
    sort: int | float = 1
    # 以下は入力に依存しない固定値
    type: str | None = None
    type_name: str | None = None
    free_game_available: bool | None = None
    image_url: str | None = None
    is_paid_game: bool = False
    is_jackpot_game: bool = False
    is_hot_game: bool = False
    turnover: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "vendorCode": self.vendor_code,
            "code": self.code,
            "name": self.name,
            "image": self.image,
            "category": self.category,
            "type": self.type,
            "typeName": self.type_name,
            "platform": self.platform,
            "freeGameAvailable": self.free_game_available,
            "isPaidGame": self.is_paid_game,
            "imageUrl": self.image_url,
            "isJackpotGame": self.is_jackpot_game,
            "isHotGame": self.is_hot_game,
            "turnover": self.turnover,
            "sort": self.sort,
            "rtp": self.rtp,
            "updateDate": self.update_date,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> GameRecord:
        return GameRecord(
            vendor_code=data["vendorCode"],
            code=data["code"],
            name=data.get("name"),
            image=data.get("image"),
            category=data.get("category"),
            platform=data.get("platform"),
            rtp=data.get("rtp"),
            update_date=data.get("updateDate"),
            sort=data["sort"],
            type=data.get("type"),
            type_name=data.get("typeName"),
            free_game_available=data.get("freeGameAvailable"),
            image_url=data.get("imageUrl"),
            is_paid_game=data.get("isPaidGame", False),
            is_jackpot_game=data.get("isJackpotGame", False),
            is_hot_game=data.get("isHotGame", False),
            turnover=float(data.get("turnover", 0.0)),
        )
