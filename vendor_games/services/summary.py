from __future__ import annotations

from ..models.processing_result import ConversionResult

"""SUMMARY line rendering for the vendor games converter.

Format::

    SUMMARY sheets={selected} converted={converted} skipped={skipped} games={games} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: ConversionResult) -> str:
    """Render a SUMMARY line from a ConversionResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from vendor_games.models import ExportDocument
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ConversionResult(
        ...     document=ExportDocument(), selected_sheets=3, converted_sheets=2,
        ...     skipped_sheets=1, total_games=40, start_time=t, end_time=t,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY sheets=3 converted=2 skipped=1 games=40 elapsed_sec=2'
    """
    return (
        f"SUMMARY sheets={result.selected_sheets} "
        f"converted={result.converted_sheets} "
        f"skipped={result.skipped_sheets} "
        f"games={result.total_games} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
