from __future__ import annotations

import pytest

from vendor_games.models import ConversionConfig, VendorConfig
from vendor_games.services.image_url import build_image_url


def test_build_image_url_defaults_prefix_to_vendor_segment():
    cfg = ConversionConfig(base_url="https://x.test", image_lang="en")
    assert build_image_url("ABC", "G1", cfg) == "https://x.test/images/games/abc/abc/games/en/G1.png"


def test_build_image_url_uses_vendor_prefix_and_strips_slashes():
    cfg = ConversionConfig(
        base_url="  https://cdn.example.com///  ",
        image_lang=" zh ",
        vendor_configs={"PGSOFT": VendorConfig(prefix=" pg ")},
    )
    url = build_image_url(" PGSOFT ", "fortune-tiger", cfg)
    assert url == "https://cdn.example.com/images/games/pgsoft/pg/games/zh/fortune-tiger.png"


def test_build_image_url_prefix_lookup_is_case_sensitive():
    cfg = ConversionConfig(base_url="https://x.test", vendor_configs={"pgsoft": VendorConfig(prefix="pg")})
    assert build_image_url("PGSOFT", "G1", cfg) == "https://x.test/images/games/pgsoft/pgsoft/games/en/G1.png"


def test_build_image_url_blank_prefix_falls_back():
    cfg = ConversionConfig(base_url="https://x.test", vendor_configs={"ABC": VendorConfig(prefix="  ")})
    assert build_image_url("ABC", "G1", cfg) == "https://x.test/images/games/abc/abc/games/en/G1.png"


def test_build_image_url_default_language():
    cfg = ConversionConfig(base_url="https://x.test", image_lang="   ")
    assert "/games/en/" in build_image_url("ABC", "G1", cfg)


@pytest.mark.parametrize("base_url", ["", "   ", "///"])
def test_build_image_url_blank_base_url(base_url):
    assert build_image_url("ABC", "G1", ConversionConfig(base_url=base_url)) is None


@pytest.mark.parametrize("vendor", ["", "  ", None])
def test_build_image_url_blank_vendor(vendor):
    assert build_image_url(vendor, "G1", ConversionConfig(base_url="https://x.test")) is None


def test_build_image_url_shape():
    cfg = ConversionConfig(base_url="https://x.test", vendor_configs={"Jili": VendorConfig(prefix="jl")})
    url = build_image_url("Jili", "007", cfg)
    assert url.endswith("/007.png")
    assert url.split("/images/games/")[1].startswith("jili/")
