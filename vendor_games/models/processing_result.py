from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .vendor_bundle import ExportDocument

"""Processing result models for the vendor games converter.

Aggregates what happened to each selected sheet of a batch so the CLI can print
the SUMMARY line and pick an exit code.
"""

__all__ = [
    "SheetStatus",
    "SheetStat",
    "ConversionResult",
]


class SheetStatus(Enum):
    """Outcome of one selected sheet.

    - CONVERTED: produced a VendorBundle
    - SKIPPED: no header row, no games, or not in the workbook
    """
    CONVERTED = "converted"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SheetStat:
    """Per-sheet conversion statistics."""
    sheet_name: str
    vendor_code: str | None  # スキップ時は None
    status: str  # converted/skipped
    total_games: int = 0


@dataclass(frozen=True)
class ConversionResult:
    """Aggregated result of one export run."""
    document: ExportDocument
    selected_sheets: int  # 選択シート数
    converted_sheets: int  # VendorBundle を生成したシート数
    skipped_sheets: int  # ヘッダ無し / ゲーム 0 件 / 未検出
    total_games: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    sheet_stats: list[SheetStat] = field(default_factory=list)

    @property
    def has_skips(self) -> bool:
        return self.skipped_sheets > 0
