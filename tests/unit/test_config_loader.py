from __future__ import annotations
import pytest
from pathlib import Path
from vendor_games.config.loader import (
    ConfigError,
    ExportSettings,
    apply_env_overrides,
    load_config,
    parse_prefix_overrides,
)
from vendor_games.models import VendorConfig


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_file == "./data/games.xlsx"
    assert cfg.sheets == ["PG"]
    assert cfg.base_url == "https://cdn.example.com/"
    assert cfg.image_lang == "zh"
    assert cfg.vendor_prefixes == {"PGSOFT": "pg"}
    assert cfg.output == "./out/vendors-games.json"


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_empty_file_gives_defaults(temp_workdir: Path):
    p = temp_workdir / "config" / "export.yml"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == ExportSettings()


def test_load_config_invalid_yaml(temp_workdir: Path):
    p = temp_workdir / "config" / "export.yml"
    p.write_text("base_url: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(p)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_vendor_without_prefix(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("    prefix: pg\n", "    other: pg\n")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_sheets_must_be_list(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("sheets: [PG]", "sheets: PG")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_apply_env_overrides():
    base = ExportSettings(base_url="https://file.test", image_lang="zh")
    out = apply_env_overrides(base, {"VENDOR_GAMES_BASE_URL": "https://env.test", "VENDOR_GAMES_IMAGE_LANG": ""})
    assert out.base_url == "https://env.test"
    assert out.image_lang == "zh"
    assert apply_env_overrides(base, {}) is base


def test_parse_prefix_overrides():
    assert parse_prefix_overrides(["PGSOFT=pg", " JILI = jl "]) == {"PGSOFT": "pg", "JILI": "jl"}
    with pytest.raises(ConfigError):
        parse_prefix_overrides(["no-separator"])
    with pytest.raises(ConfigError):
        parse_prefix_overrides(["=x"])


def test_to_conversion_config_uses_explicit_prefixes():
    settings = ExportSettings(base_url="https://x.test", image_lang="en", vendor_prefixes={" PG ": "pg"})
    cfg = settings.to_conversion_config()
    assert cfg.base_url == "https://x.test"
    assert cfg.vendor_configs == {"PG": VendorConfig(prefix="pg")}
    seeded = settings.to_conversion_config({"JILI": VendorConfig(prefix="jili")})
    assert seeded.vendor_configs == {"JILI": VendorConfig(prefix="jili")}
