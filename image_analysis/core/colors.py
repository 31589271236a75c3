"""
Perceptual palette extraction.

Colors are tallied in first-seen pixel order and accepted greedily: a candidate
joins the palette only when it differs from every accepted color on all three
HSB axes. The result therefore depends on scan order, not on frequency.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from image_analysis.config.defaults import DEFAULTS
from image_analysis.imaging.codec import RGB, ImageCodec, PillowCodec

LOGGER = logging.getLogger(__name__)

HSB = Tuple[float, float, float]

_PALETTE_DEFAULTS: Mapping[str, Any] = DEFAULTS["palette"]  # type: ignore[assignment]
MAX_UNIQUE_COLORS = int(_PALETTE_DEFAULTS["max_colors"])
SATURATION_THRESHOLD = float(_PALETTE_DEFAULTS["saturation_threshold"])
BRIGHTNESS_THRESHOLD = float(_PALETTE_DEFAULTS["brightness_threshold"])
HUE_THRESHOLD = float(_PALETTE_DEFAULTS["hue_threshold"])


@dataclass(frozen=True)
class ColorThresholds:
    """Minimum per-axis separation between two palette colors."""

    saturation: float = SATURATION_THRESHOLD
    brightness: float = BRIGHTNESS_THRESHOLD
    hue: float = HUE_THRESHOLD
    max_colors: int = MAX_UNIQUE_COLORS

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ColorThresholds":
        palette = config.get("palette", {}) if isinstance(config, Mapping) else {}
        return cls(
            saturation=float(palette.get("saturation_threshold", SATURATION_THRESHOLD)),
            brightness=float(palette.get("brightness_threshold", BRIGHTNESS_THRESHOLD)),
            hue=float(palette.get("hue_threshold", HUE_THRESHOLD)),
            max_colors=int(palette.get("max_colors", MAX_UNIQUE_COLORS)),
        )


def rgb_to_hsb(rgb: Sequence[int]) -> HSB:
    """Convert an 8-bit RGB triple to (hue degrees, saturation, brightness)."""
    r, g, b = (channel / 255.0 for channel in rgb[:3])
    high = max(r, g, b)
    low = min(r, g, b)
    delta = high - low

    if delta == 0.0:
        hue = 0.0
    elif high == r:
        hue = 60.0 * (((g - b) / delta) % 6.0)
    elif high == g:
        hue = 60.0 * (((b - r) / delta) + 2.0)
    else:
        hue = 60.0 * (((r - g) / delta) + 4.0)

    saturation = 0.0 if high == 0.0 else delta / high
    return hue % 360.0, saturation, high


def hsb_diff(first: HSB, second: HSB) -> HSB:
    """Absolute differences as (saturation, brightness, hue)."""
    return (
        abs(first[1] - second[1]),
        abs(first[2] - second[2]),
        abs(first[0] - second[0]),
    )


def is_distinct(candidate: HSB, accepted: HSB, thresholds: ColorThresholds | None = None) -> bool:
    """True when the two colors are separated on every axis (strict)."""
    limits = thresholds or ColorThresholds()
    sat_diff, bri_diff, hue_diff = hsb_diff(candidate, accepted)
    return sat_diff > limits.saturation and bri_diff > limits.brightness and hue_diff > limits.hue


def tally_colors(pixels: Iterable[RGB]) -> Counter:
    """Count occurrences of each RGB value; keys keep first-seen order."""
    return Counter(tuple(pixel[:3]) for pixel in pixels)


def select_unique_colors(candidates: Iterable[RGB], thresholds: ColorThresholds | None = None) -> List[RGB]:
    limits = thresholds or ColorThresholds()
    selected: List[RGB] = []
    selected_hsb: List[HSB] = []
    for color in candidates:
        if len(selected) >= limits.max_colors:
            break
        color_hsb = rgb_to_hsb(color)
        if all(is_distinct(color_hsb, other, limits) for other in selected_hsb):
            selected.append(color)
            selected_hsb.append(color_hsb)
    return selected


def to_hex(rgb: Sequence[int]) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb[:3])


def extract_unique_colors(
    image: Any, thresholds: ColorThresholds | None = None, codec: ImageCodec | None = None
) -> list[str]:
    """Return up to `max_colors` perceptually distinct colors as #RRGGBB strings."""
    codec = codec or PillowCodec()
    tally = tally_colors(codec.rgb_pixels(image))
    selected = select_unique_colors(tally.keys(), thresholds)
    LOGGER.debug("Palette: %d distinct pixel values, %d selected", len(tally), len(selected))
    return [to_hex(color) for color in selected]
