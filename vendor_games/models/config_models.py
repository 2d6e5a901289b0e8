from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the Excel -> vendor games JSON converter.

These describe the values the conversion pipeline reads. They are built once by
the config loader (or by tests) before a batch starts and never mutated during
conversion.
"""

__all__ = [
    "VendorConfig",
    "ConversionConfig",
]


@dataclass(frozen=True)
class VendorConfig:
    """Per-vendor image settings.

    The prefix is the path segment inserted after the vendor segment of an
    image URL. Discovery seeds it with the lowercased vendor key.
    """
    prefix: str


@dataclass(frozen=True)
class ConversionConfig:
    """Settings consumed by the image URL builder for one batch."""
    base_url: str  # 例: https://cdn.example.com
    image_lang: str = ""  # 空なら "en"
    vendor_configs: dict[str, VendorConfig] = field(default_factory=dict)  # vendor key -> VendorConfig

    def prefix_for(self, vendor_key: str) -> str | None:
        """Return the configured prefix for a trimmed vendor key, if any."""
        cfg = self.vendor_configs.get(vendor_key)
        if cfg is None:
            return None
        return cfg.prefix
