from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""DiagnosticRecord model for skipped-sheet logging.

Structural skips (no ``Game Code`` header, no games, sheet missing from the
workbook) are not errors, but the caller still wants to see them. Each one is
recorded as a DiagnosticRecord and written as a JSON Lines entry. ``row=-1`` is
used when the diagnostic applies to the whole sheet.
"""

__all__ = [
    "DiagnosticRecord",
    "NO_HEADER_ROW",
    "NO_GAMES",
    "SHEET_NOT_FOUND",
]

NO_HEADER_ROW = "NO_HEADER_ROW"
NO_GAMES = "NO_GAMES"
SHEET_NOT_FOUND = "SHEET_NOT_FOUND"


@dataclass(frozen=True)
class DiagnosticRecord:
    """Structured diagnostic record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        sheet: Sheet name the diagnostic refers to
        row: Row number (1-based). -1 for sheet-level diagnostics
        kind: Classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    sheet: str
    row: int  # 不明/シート単位の場合 -1
    kind: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(sheet: str, row: int, kind: str, message: str) -> DiagnosticRecord:
        """Create a new DiagnosticRecord with the current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return DiagnosticRecord(
            timestamp=ts,
            sheet=sheet,
            row=row,
            kind=kind,
            message=message,
        )

    def to_json_line(self) -> str:
        # dataclass -> dict で追加キーを防ぐ
        return json.dumps(asdict(self), ensure_ascii=False)
