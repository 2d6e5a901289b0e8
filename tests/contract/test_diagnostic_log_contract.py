from __future__ import annotations

import json
from pathlib import Path

from vendor_games.logging.diagnostic_log import DiagnosticLog
from vendor_games.models import ConversionConfig
from vendor_games.services.orchestrator import run_export

"""Diagnostic log JSON Lines contract (skipped sheets)."""

KEYS = {"timestamp", "sheet", "row", "kind", "message"}
KINDS = {"NO_HEADER_ROW", "NO_GAMES", "SHEET_NOT_FOUND"}


def test_diagnostic_lines_for_each_skip_kind(temp_workdir: Path, pg_sheet, no_header_sheet):
    diagnostics = DiagnosticLog()
    header_only = [["Game Code"], [None, "x"]]
    run_export(
        {"PG": pg_sheet, "Notes": no_header_sheet, "HeaderOnly": header_only},
        ["PG", "Notes", "HeaderOnly", "Ghost"],
        ConversionConfig(base_url="https://x.test"),
        diagnostics=diagnostics,
    )
    path = diagnostics.flush()
    rows = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert {r["sheet"]: r["kind"] for r in rows} == {
        "Notes": "NO_HEADER_ROW",
        "HeaderOnly": "NO_GAMES",
        "Ghost": "SHEET_NOT_FOUND",
    }
    for r in rows:
        assert set(r.keys()) == KEYS
        assert r["kind"] in KINDS
        assert isinstance(r["row"], int) and (r["row"] == -1 or r["row"] >= 1)
        assert r["timestamp"].endswith("Z")
