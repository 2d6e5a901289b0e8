from __future__ import annotations

import json

import jsonschema
import pytest

from vendor_games.config.loader import SCHEMA_PATH

"""Config schema contract (config_schema.json)."""


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_accepts_full_example():
    jsonschema.validate(
        {
            "source_file": "data/games.xlsx",
            "sheets": ["PG", "JILI"],
            "base_url": "https://cdn.example.com",
            "image_lang": "en",
            "vendors": {"PGSOFT": {"prefix": "pg"}},
            "output": "vendors-games.json",
        },
        _schema(),
    )


def test_config_schema_accepts_empty():
    jsonschema.validate({}, _schema())


@pytest.mark.parametrize(
    "data",
    [
        {"unknown": 1},
        {"sheets": "PG"},
        {"vendors": {"PG": {"prefix": "pg", "extra": True}}},
        {"vendors": {"PG": "pg"}},
        {"base_url": 123},
    ],
)
def test_config_schema_rejects(data):
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(data, _schema())
