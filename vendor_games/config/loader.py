from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ConversionConfig, VendorConfig

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/export.yml``)
- Validate against ``config_schema.json`` (unknown keys rejected)
- Overlay environment variables (``VENDOR_GAMES_BASE_URL`` / ``VENDOR_GAMES_IMAGE_LANG``)
- Build the immutable ConversionConfig used by the converter
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/export.yml")

ENV_BASE_URL = "VENDOR_GAMES_BASE_URL"
ENV_IMAGE_LANG = "VENDOR_GAMES_IMAGE_LANG"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ExportSettings:
    """Everything a CLI run needs besides the workbook contents."""
    source_file: str | None = None
    sheets: list[str] = field(default_factory=list)  # 空なら全シート
    base_url: str = ""
    image_lang: str = ""
    vendor_prefixes: dict[str, str] = field(default_factory=dict)  # vendor key -> prefix
    output: str | None = None

    def to_conversion_config(self, vendor_configs: dict[str, VendorConfig] | None = None) -> ConversionConfig:
        """Build the ConversionConfig; without seeded configs only explicit prefixes are used."""
        if vendor_configs is None:
            vendor_configs = {k.strip(): VendorConfig(prefix=v) for k, v in self.vendor_prefixes.items()}
        return ConversionConfig(
            base_url=self.base_url,
            image_lang=self.image_lang,
            vendor_configs=dict(vendor_configs),
        )


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ExportSettings:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    vendors = data.get("vendors") or {}
    return ExportSettings(
        source_file=data.get("source_file"),
        sheets=list(data.get("sheets") or []),
        base_url=data.get("base_url", ""),
        image_lang=data.get("image_lang", ""),
        vendor_prefixes={str(k): v["prefix"] for k, v in vendors.items()},
        output=data.get("output"),
    )


def apply_env_overrides(settings: ExportSettings, environ: dict[str, str] | None = None) -> ExportSettings:
    """Environment variables take precedence over the config file."""
    env = os.environ if environ is None else environ
    updates: dict[str, Any] = {}
    if env.get(ENV_BASE_URL):
        updates["base_url"] = env[ENV_BASE_URL]
    if env.get(ENV_IMAGE_LANG):
        updates["image_lang"] = env[ENV_IMAGE_LANG]
    return replace(settings, **updates) if updates else settings


def parse_prefix_overrides(items: list[str]) -> dict[str, str]:
    """Parse ``VENDOR=PREFIX`` pairs given on the command line."""
    result: dict[str, str] = {}
    for item in items:
        vendor, sep, prefix = item.partition("=")
        if not sep or not vendor.strip():
            raise ConfigError(f"invalid --prefix value (expected VENDOR=PREFIX): {item}")
        result[vendor.strip()] = prefix.strip()
    return result
