# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Callable

import pandas as pd
import pytest

from vendor_games.config.loader import ENV_BASE_URL, ENV_IMAGE_LANG
from vendor_games.logging.init import reset_logging
from vendor_games.models import ConversionConfig


@pytest.fixture(autouse=True)
def _isolate_env_and_logging(monkeypatch):
    # setenv -> delenv で元の状態を記録させ、.env 読み込み分もテスト後に戻す
    for name in (ENV_BASE_URL, ENV_IMAGE_LANG):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def pg_sheet() -> list[list[object]]:
    return [
        ["PG Soft game list"],
        ["Vendor Code:", "PGSOFT", None, "Wallet Code：", "W-PG"],
        [],
        ["No.", "Game Code", "CN Game Name", "Game Name", "Game Type", "Rank", "Platform", "RTP", "Update Date"],
        [1, "fortune-tiger", "寶虎", "Fortune Tiger", "Slot", 3, "H5", "96.81%", "2024-01-05"],
        [2, "mahjong-ways", None, "Mahjong Ways", "SLOT", None, "H5", "96.92%", None],
        [None, None, None, None, None, None, None, None, None],
        [3, None, None, "Missing code", "Slot", 1, None, None, None],
        [4, "lucky-neko", None, "Lucky Neko", None, "abc", "H5", None, None],
    ]


@pytest.fixture()
def no_header_sheet() -> list[list[object]]:
    return [
        ["Notes"],
        ["This tab only holds release notes"],
    ]


@pytest.fixture()
def conversion_config() -> ConversionConfig:
    return ConversionConfig(base_url="https://cdn.example.com/", image_lang="zh")


@pytest.fixture()
def make_workbook() -> Callable[[Path, dict[str, list[list[object]]]], Path]:
    def _make(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                df = pd.DataFrame(rows)
                df.to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _make


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_file: ./data/games.xlsx
sheets: [PG]
base_url: https://cdn.example.com/
image_lang: zh
vendors:
  PGSOFT:
    prefix: pg
output: ./out/vendors-games.json
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "export.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
