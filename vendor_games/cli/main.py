from __future__ import annotations
import argparse
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ExportSettings,
    apply_env_overrides,
    load_config,
    parse_prefix_overrides,
)
from ..excel.reader import WorkbookReadError, read_workbook
from ..logging.diagnostic_log import DiagnosticLog
from ..logging.init import log_summary, set_debug, setup_logging
from ..services.discovery import NoUsableSheetsError, discover_sheets, seed_vendor_configs, select_sheets
from ..services.orchestrator import DEFAULT_OUTPUT, PreconditionError, run_export, write_document
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, config/export.yml (optional unless --config is given), CLI flags
- Decode the workbook and discover its sheets
- --list-sheets: print discovered sheets and exit
- Otherwise convert the selected sheets, write JSON, print SUMMARY

設定の優先順位: CLI 引数 > 環境変数 (.env 含む) > config ファイル
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_SKIP = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; a failure only produces a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        logging.getLogger(__name__).warning(f"failed to load .env: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Excel -> vendor games JSON converter")
    p.add_argument("workbook", nargs="?", help="Workbook (.xlsx/.xls/.csv); defaults to source_file in config")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--base-url", default=None, help="Image base URL")
    p.add_argument("--lang", default=None, help="Image language segment (default: en)")
    p.add_argument("--sheet", action="append", default=None, help="Sheet to convert (repeatable, keeps order)")
    p.add_argument("--prefix", action="append", default=[], metavar="VENDOR=PREFIX", help="Vendor image prefix")
    p.add_argument("--output", "-o", default=None, help=f"Output path or '-' for stdout (default: {DEFAULT_OUTPUT})")
    p.add_argument("--list-sheets", action="store_true", help="Print discovered sheets and exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> ExportSettings:
    config_path = args.config or DEFAULT_CONFIG_PATH
    if args.config is not None or config_path.exists():
        settings = load_config(config_path)
    else:
        settings = ExportSettings()
    settings = apply_env_overrides(settings)

    prefixes = dict(settings.vendor_prefixes)
    prefixes.update(parse_prefix_overrides(args.prefix))
    updates: dict[str, object] = {"vendor_prefixes": prefixes}
    if args.workbook:
        updates["source_file"] = args.workbook
    if args.base_url is not None:
        updates["base_url"] = args.base_url
    if args.lang is not None:
        updates["image_lang"] = args.lang
    if args.sheet:
        updates["sheets"] = list(args.sheet)
    if args.output is not None:
        updates["output"] = args.output
    return replace(settings, **updates)


def _list_sheets(sheets, vendor_configs) -> int:
    for s in sheets:
        cfg = vendor_configs.get(s.vendor_key)
        prefix = cfg.prefix if cfg else s.vendor_key.lower()
        print(f"SHEET: {s.name} vendor={s.vendor_key} wallet={s.wallet_code or '-'} prefix={prefix}")
    return EXIT_SUCCESS_ALL


@contextmanager
def _redirect_to_stderr(logger: logging.Logger, enabled: bool = True) -> Iterator[None]:
    """Move the app handlers to stderr for the duration of the block."""
    # JSON を stdout に出す場合はログを stderr へ退避
    previous: list[tuple[logging.StreamHandler, object]] = []
    if enabled:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler):
                previous.append((h, h.setStream(sys.stderr)))
    try:
        yield
    finally:
        for h, stream in previous:
            if stream is not None:
                h.setStream(stream)


def _export(args: argparse.Namespace, settings: ExportSettings, output: str, logger: logging.Logger) -> int:
    source = Path(settings.source_file)
    logger.info(f"Reading workbook: {source}")
    try:
        workbook = read_workbook(source)
    except WorkbookReadError as e:
        logger.error(f"Failed to read Excel file: {e}")
        return EXIT_FATAL

    try:
        sheets = discover_sheets(workbook)
    except NoUsableSheetsError as e:
        logger.error(str(e))
        return EXIT_FATAL

    vendor_configs = seed_vendor_configs(sheets, settings.vendor_prefixes)
    if args.list_sheets:
        return _list_sheets(sheets, vendor_configs)

    selected = select_sheets(sheets, settings.sheets)
    diagnostics = DiagnosticLog()
    try:
        result = run_export(
            workbook,
            selected,
            settings.to_conversion_config(vendor_configs),
            diagnostics=diagnostics,
        )
    except PreconditionError as e:
        logger.error(str(e))
        return EXIT_FATAL

    written = write_document(result.document, output)
    if written is not None:
        logger.info(f"Wrote {written}")

    if len(diagnostics):
        try:
            diag_path = diagnostics.flush()
            logger.info(f"diagnostics: {diag_path}")
        except OSError as e:
            logger.warning(f"failed to write diagnostics log: {e}")

    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.has_skips:
        return EXIT_PARTIAL_SKIP
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストから明示指定)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    try:
        settings = _resolve_settings(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not settings.source_file:
        logger.error("Please upload an Excel file first (no workbook given).")
        return EXIT_FATAL

    output = settings.output or DEFAULT_OUTPUT
    with _redirect_to_stderr(logger, enabled=output == "-" and not args.list_sheets):
        return _export(args, settings, output, logger)
