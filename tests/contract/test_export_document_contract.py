from __future__ import annotations

import json
import re

from vendor_games.models import ConversionConfig
from vendor_games.services.converter import convert_batch

"""Output JSON contract: every field present, null-vs-value semantics fixed."""

VENDOR_KEYS = {"vendorCode", "walletCode", "exportDate", "totalGames", "games"}
GAME_KEYS = {
    "vendorCode", "code", "name", "image", "category", "type", "typeName", "platform",
    "freeGameAvailable", "isPaidGame", "imageUrl", "isJackpotGame", "isHotGame",
    "turnover", "sort", "rtp", "updateDate",
}
ISO_Z = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_export_document_shape(pg_sheet, conversion_config):
    jili = [["Game Code", "Game Name"], ["J1", "Jili One"]]
    doc = convert_batch([("PG", pg_sheet), ("JILI", jili)], conversion_config)
    data = json.loads(doc.to_json())

    assert set(data.keys()) == {"vendors"}
    assert len(data["vendors"]) == 2
    for vendor in data["vendors"]:
        assert set(vendor.keys()) == VENDOR_KEYS
        assert ISO_Z.match(vendor["exportDate"])
        assert vendor["totalGames"] == len(vendor["games"])
        for game in vendor["games"]:
            assert set(game.keys()) == GAME_KEYS
            assert game["vendorCode"] == vendor["vendorCode"]
            assert isinstance(game["code"], str) and game["code"]
            assert game["type"] is None
            assert game["typeName"] is None
            assert game["freeGameAvailable"] is None
            assert game["imageUrl"] is None
            assert game["isPaidGame"] is False
            assert game["isJackpotGame"] is False
            assert game["isHotGame"] is False
            assert game["turnover"] == 0.0
            assert isinstance(game["sort"], (int, float))

    jili_vendor = data["vendors"][1]
    assert jili_vendor["walletCode"] is None
    assert jili_vendor["games"][0]["category"] is None
    assert jili_vendor["games"][0]["rtp"] is None


def test_image_is_null_without_base_url(pg_sheet):
    doc = convert_batch([("PG", pg_sheet)], ConversionConfig(base_url=""))
    assert all(g["image"] is None for g in doc.to_dict()["vendors"][0]["games"])


def test_round_trip_preserves_values(pg_sheet, conversion_config):
    doc = convert_batch([("PG", pg_sheet)], conversion_config)
    assert json.loads(json.dumps(json.loads(doc.to_json()))) == doc.to_dict()
