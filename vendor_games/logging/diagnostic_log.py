from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.diagnostic_record import DiagnosticRecord

"""Diagnostic log buffering.

- JSON Lines 固定スキーマ (DiagnosticRecord のキーのみ)
- 実行ごとに ``logs/diagnostics-YYYYMMDD-HHMMSS.log`` (UTC) を生成 (flush 時)
- 変換中はメモリに溜め、CLI 終了前に一括書き出し
"""

__all__ = [
    "DiagnosticRecord",
    "DiagnosticLog",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class DiagnosticLog:
    """In-memory buffer for diagnostic records. Flush writes JSON Lines.

    Single-threaded use only; the conversion runs sheet by sheet.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[DiagnosticRecord] = []
        self._logs_dir = logs_dir or LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"diagnostics-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[DiagnosticRecord]:
        return list(self._records)

    def append(self, record: DiagnosticRecord) -> None:
        self._records.append(record)

    def record(self, sheet: str, row: int, kind: str, message: str) -> DiagnosticRecord:
        rec = DiagnosticRecord.create(sheet=sheet, row=row, kind=kind, message=message)
        self.append(rec)
        return rec

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file; no file is created when empty."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
