from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Protocol

from ..logging.diagnostic_log import DiagnosticLog
from ..models.config_models import ConversionConfig
from ..models.diagnostic_record import NO_GAMES, NO_HEADER_ROW
from ..models.game_record import CellValue, GameRecord
from ..models.vendor_bundle import ExportDocument, VendorBundle
from .headers import (
    GAME_CODE_KEY,
    build_column_map,
    cell_text,
    is_blank_row,
    locate_header_row,
)
from .image_url import build_image_url
from .metadata import scan_metadata

"""Sheet -> VendorBundle conversion.

Pipeline per sheet:
1. scan_metadata (vendor / wallet code labels)
2. locate_header_row (row containing ``Game Code``)
3. build_column_map on that row
4. convert_row for every row below the header
5. wrap kept records into a VendorBundle

Sheets without a header row or without any game rows are skipped (None) and a
diagnostic is recorded. Nothing in this module raises for odd grid content.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "export_timestamp",
    "convert_row",
    "convert_sheet",
    "convert_batch",
]


class SheetProgress(Protocol):
    def start_sheet(self, sheet_name: str) -> None: ...

    def finish_sheet(self, success: bool = True, games: int = 0) -> None: ...


def export_timestamp(now: datetime | None = None) -> str:
    """ISO8601 UTC timestamp with millisecond precision and 'Z' suffix."""
    now = now or datetime.now(UTC)
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _get_value(row: Sequence[CellValue], column_map: Mapping[str, int], key: str) -> CellValue:
    idx = column_map.get(key)
    if idx is None or idx >= len(row):
        return None
    value = row[idx]
    # NaN セルは空セル扱い (JSON に NaN を出さない)
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _resolve_sort(rank: CellValue, positional_rank: int) -> int | float:
    """Rank column value when numeric (or parseable), else the positional rank."""
    if isinstance(rank, (int, float)) and not isinstance(rank, bool):
        if isinstance(rank, float) and not math.isfinite(rank):
            return positional_rank
        return rank
    if rank is None or rank == "":
        return positional_rank
    try:
        number = float(cell_text(rank).strip())
    except ValueError:
        return positional_rank
    if not math.isfinite(number):
        return positional_rank
    return int(number) if number.is_integer() else number


def convert_row(
    row: Sequence[CellValue],
    column_map: Mapping[str, int],
    vendor_code: str,
    positional_rank: int,
    config: ConversionConfig,
) -> GameRecord | None:
    """Convert one data row; None means the row is skipped."""
    if is_blank_row(row):
        return None
    game_code = _get_value(row, column_map, GAME_CODE_KEY)
    if not game_code:
        return None

    code = cell_text(game_code)
    name_cn = _get_value(row, column_map, "cngamename")
    name_en = _get_value(row, column_map, "gamename")
    name = name_cn or name_en
    game_type = _get_value(row, column_map, "gametype")

    return GameRecord(
        vendor_code=vendor_code,
        code=code,
        name=cell_text(name) if name else None,
        image=build_image_url(vendor_code, code, config),
        category=cell_text(game_type).lower() if game_type else None,
        platform=_get_value(row, column_map, "platform"),
        rtp=_get_value(row, column_map, "rtp"),
        update_date=_get_value(row, column_map, "updatedate"),
        sort=_resolve_sort(_get_value(row, column_map, "rank"), positional_rank),
    )


def convert_sheet(
    sheet_name: str,
    sheet: Sequence[Sequence[CellValue]],
    config: ConversionConfig,
    *,
    export_date: str | None = None,
    diagnostics: DiagnosticLog | None = None,
) -> VendorBundle | None:
    """Convert one sheet grid into a VendorBundle, or None when it yields no games."""
    meta = scan_metadata(sheet)

    header_idx = locate_header_row(sheet)
    if header_idx is None:
        logger.warning(f'No "Game Code" header found in sheet: {sheet_name}')
        if diagnostics is not None:
            diagnostics.record(sheet_name, -1, NO_HEADER_ROW, 'no row contains a "Game Code" header')
        return None

    column_map = build_column_map(sheet[header_idx])
    vendor_code = (meta.vendor_code or sheet_name).strip()

    games: list[GameRecord] = []
    for offset, row in enumerate(sheet[header_idx + 1:], start=header_idx + 2):
        record = convert_row(row, column_map, vendor_code, len(games) + 1, config)
        if record is None:
            logger.debug(f"sheet={sheet_name} row={offset} skipped (blank or no game code)")
            continue
        games.append(record)

    if not games:
        logger.warning(f"No games found in sheet: {sheet_name}")
        if diagnostics is not None:
            diagnostics.record(sheet_name, header_idx + 1, NO_GAMES, "header found but no row has a game code")
        return None

    return VendorBundle(
        vendor_code=vendor_code,
        wallet_code=meta.wallet_code or None,
        export_date=export_date or export_timestamp(),
        games=games,
    )


def convert_batch(
    selected_sheets: Iterable[tuple[str, Sequence[Sequence[CellValue]]]],
    config: ConversionConfig,
    *,
    export_date: str | None = None,
    diagnostics: DiagnosticLog | None = None,
    progress: SheetProgress | None = None,
    bundle_sink: Callable[[str, VendorBundle | None], None] | None = None,
) -> ExportDocument:
    """Convert selected (name, grid) pairs in order into an ExportDocument.

    One export_date is shared by every bundle. Sheets returning None are left out
    without aborting the batch. ``bundle_sink`` (if given) is called with
    ``(sheet_name, bundle_or_None)`` after each sheet.
    """
    export_date = export_date or export_timestamp()
    vendors: list[VendorBundle] = []
    for sheet_name, sheet in selected_sheets:
        if progress is not None:
            progress.start_sheet(sheet_name)
        bundle = convert_sheet(
            sheet_name,
            sheet,
            config,
            export_date=export_date,
            diagnostics=diagnostics,
        )
        if bundle is not None:
            vendors.append(bundle)
            logger.info(f"sheet={sheet_name} vendor={bundle.vendor_code} games={bundle.total_games}")
        if bundle_sink is not None:
            bundle_sink(sheet_name, bundle)
        if progress is not None:
            progress.finish_sheet(success=bundle is not None, games=bundle.total_games if bundle else 0)
    return ExportDocument(vendors=vendors)
