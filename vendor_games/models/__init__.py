"""Domain models for the Excel -> vendor games JSON converter."""

from .config_models import ConversionConfig, VendorConfig
from .diagnostic_record import DiagnosticRecord
from .game_record import CellValue, GameRecord, Grid
from .processing_result import ConversionResult, SheetStat, SheetStatus
from .sheet_info import SheetInfo
from .vendor_bundle import ExportDocument, SheetMetadata, VendorBundle

__all__ = [
    # Configuration models
    "ConversionConfig",
    "VendorConfig",
    # Conversion models
    "CellValue",
    "Grid",
    "GameRecord",
    "SheetMetadata",
    "VendorBundle",
    "ExportDocument",
    "SheetInfo",
    # Results / diagnostics
    "ConversionResult",
    "SheetStat",
    "SheetStatus",
    "DiagnosticRecord",
]
