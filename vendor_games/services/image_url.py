from __future__ import annotations

from ..models.config_models import ConversionConfig

"""Image URL builder.

URL layout::

    {base}/images/games/{vendor}/{prefix}/games/{lang}/{code}.png

``vendor`` is the lowercased vendor code, ``prefix`` the per-vendor configured
prefix (falls back to ``vendor``), ``lang`` the configured language (falls back
to ``en``).
"""

__all__ = [
    "DEFAULT_IMAGE_LANG",
    "build_image_url",
]

DEFAULT_IMAGE_LANG = "en"


def build_image_url(vendor_code: str | None, game_code: str, config: ConversionConfig) -> str | None:
    """Compose the image URL for one game, or None when base URL / vendor is blank."""
    base = (config.base_url or "").strip().rstrip("/")
    if not base:
        return None
    vendor_key = (vendor_code or "").strip()
    if not vendor_key:
        return None

    vendor_segment = vendor_key.lower()
    prefix = (config.prefix_for(vendor_key) or "").strip() or vendor_segment
    lang = (config.image_lang or "").strip() or DEFAULT_IMAGE_LANG
    return f"{base}/images/games/{vendor_segment}/{prefix}/games/{lang}/{game_code}.png"
