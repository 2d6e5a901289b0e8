from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..logging.diagnostic_log import DiagnosticLog
from ..models.config_models import ConversionConfig
from ..models.diagnostic_record import SHEET_NOT_FOUND
from ..models.game_record import Grid
from ..models.processing_result import ConversionResult, SheetStat, SheetStatus
from ..models.vendor_bundle import ExportDocument, VendorBundle
from .converter import convert_batch, export_timestamp
from .progress import ProgressTracker

"""Export orchestration.

Ties the pieces together for one run:
1. validate preconditions (sheets uploaded / selected, base URL present)
2. convert the selected sheets in order with a shared export date
3. aggregate per-sheet stats and timing into a ConversionResult

Writing the JSON document is a separate step (``write_document``).
"""

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "vendors-games.json"


class PreconditionError(Exception):
    """Raised when an export is requested without the inputs it needs."""


def validate_preconditions(
    workbook: Mapping[str, Grid],
    selected_names: Sequence[str],
    config: ConversionConfig,
) -> None:
    """Check what the user must supply before conversion starts.

    Raises:
        PreconditionError: no sheets, nothing selected, or no base URL
    """
    if not workbook:
        raise PreconditionError("Please upload an Excel file first.")
    if not selected_names:
        raise PreconditionError("Please select at least one tab to convert.")
    if not (config.base_url or "").strip():
        raise PreconditionError("Please enter a base URL before converting.")


def run_export(
    workbook: Mapping[str, Grid],
    selected_names: Sequence[str],
    config: ConversionConfig,
    diagnostics: DiagnosticLog | None = None,
) -> ConversionResult:
    """Convert the selected sheets of a decoded workbook.

    Args:
        workbook: sheet name -> grid, as returned by read_workbook
        selected_names: sheets to convert, in output order
        config: base URL / language / vendor prefixes
        diagnostics: buffer receiving skipped-sheet records

    Returns:
        ConversionResult holding the ExportDocument and per-sheet stats

    Raises:
        PreconditionError: see validate_preconditions
    """
    validate_preconditions(workbook, selected_names, config)
    start_time = datetime.now(UTC)
    export_date = export_timestamp(start_time)

    stats: dict[str, SheetStat] = {}
    present: list[str] = []
    for name in selected_names:
        if name in workbook:
            present.append(name)
            continue
        # シートが存在しない場合はスキップ (バッチは継続)
        logger.warning(f"Sheet not found in workbook: {name}")
        if diagnostics is not None:
            diagnostics.record(name, -1, SHEET_NOT_FOUND, "selected sheet is not in the workbook")
        stats[name] = SheetStat(sheet_name=name, vendor_code=None, status=SheetStatus.SKIPPED.value)

    def _collect(sheet_name: str, bundle: VendorBundle | None) -> None:
        if bundle is None:
            stats[sheet_name] = SheetStat(sheet_name=sheet_name, vendor_code=None, status=SheetStatus.SKIPPED.value)
        else:
            stats[sheet_name] = SheetStat(
                sheet_name=sheet_name,
                vendor_code=bundle.vendor_code,
                status=SheetStatus.CONVERTED.value,
                total_games=bundle.total_games,
            )

    with ProgressTracker(len(present), description="Converting sheets") as progress:
        document = convert_batch(
            ((name, workbook[name]) for name in present),
            config,
            export_date=export_date,
            diagnostics=diagnostics,
            progress=progress,
            bundle_sink=_collect,
        )

    end_time = datetime.now(UTC)
    sheet_stats = [stats[name] for name in selected_names if name in stats]
    converted = sum(1 for s in sheet_stats if s.status == SheetStatus.CONVERTED.value)
    return ConversionResult(
        document=document,
        selected_sheets=len(sheet_stats),
        converted_sheets=converted,
        skipped_sheets=len(sheet_stats) - converted,
        total_games=document.total_games,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        sheet_stats=sheet_stats,
    )


def write_document(document: ExportDocument, output: str | Path = DEFAULT_OUTPUT) -> Path | None:
    """Write the export JSON (indent=2, UTF-8). ``-`` writes to stdout and returns None."""
    text = document.to_json(indent=2)
    if str(output) == "-":
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
        return None
    path = Path(output)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")
    return path
