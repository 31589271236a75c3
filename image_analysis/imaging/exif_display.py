"""
Human-readable rendering of raw EXIF values, with unit annotations.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Callable

Lookup = Callable[[str], Any]

ENUMERATIONS: dict[str, dict[int, str]] = {
    "Orientation": {
        1: "row 0 at top and column 0 at left",
        2: "row 0 at top and column 0 at right",
        3: "row 0 at bottom and column 0 at right",
        4: "row 0 at bottom and column 0 at left",
        5: "row 0 at left and column 0 at top",
        6: "row 0 at right and column 0 at top",
        7: "row 0 at right and column 0 at bottom",
        8: "row 0 at left and column 0 at bottom",
    },
    "ResolutionUnit": {1: "none", 2: "inch", 3: "cm"},
    "FocalPlaneResolutionUnit": {1: "none", 2: "inch", 3: "cm"},
    "ExposureProgram": {
        0: "not defined",
        1: "manual",
        2: "normal program",
        3: "aperture priority",
        4: "shutter priority",
        5: "creative program",
        6: "action program",
        7: "portrait mode",
        8: "landscape mode",
    },
    "MeteringMode": {
        0: "unknown",
        1: "average",
        2: "center-weighted average",
        3: "spot",
        4: "multi-spot",
        5: "pattern",
        6: "partial",
        255: "other",
    },
    "ColorSpace": {1: "sRGB", 0xFFFF: "uncalibrated"},
    "WhiteBalance": {0: "auto white balance", 1: "manual white balance"},
    "ExposureMode": {0: "auto exposure", 1: "manual exposure", 2: "auto bracket"},
    "SceneCaptureType": {0: "standard", 1: "landscape", 2: "portrait", 3: "night scene"},
    "YCbCrPositioning": {1: "centered", 2: "co-sited"},
}

# Tags whose numeric value is followed by a fixed unit.
UNIT_SUFFIXES: dict[str, str] = {
    "FocalLength": "mm",
    "FocalLengthIn35mmFilm": "mm",
    "ExposureBiasValue": "EV",
    "ShutterSpeedValue": "EV",
    "ApertureValue": "EV",
    "MaxApertureValue": "EV",
    "BrightnessValue": "EV",
    "SubjectDistance": "m",
}

VERSION_TAGS = {"ExifVersion", "FlashpixVersion", "InteropVersion"}


def is_number(value: Any) -> bool:
    """True for ints, floats and rationals (IFDRational included), not bools."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def format_number(value: Any) -> str:
    """Render an int, float, or rational as a compact decimal."""
    if isinstance(value, int):
        return str(value)
    numeric = float(value)
    if math.isnan(numeric) or math.isinf(numeric):
        return "unknown"
    return f"{numeric:g}"


def _format_fraction(value: Any) -> str:
    numerator = getattr(value, "numerator", None)
    denominator = getattr(value, "denominator", None)
    if numerator is None or denominator in (None, 0):
        return format_number(value)
    if denominator == 1:
        return str(numerator)
    return f"{numerator}/{denominator}"


def _format_bytes(value: bytes) -> str:
    try:
        return value.decode("ascii").rstrip("\x00").strip()
    except UnicodeDecodeError:
        return repr(value)


def _format_plain(value: Any) -> str:
    if isinstance(value, bytes):
        return _format_bytes(value)
    if isinstance(value, str):
        return value.rstrip("\x00").strip()
    if isinstance(value, (tuple, list)):
        return ", ".join(_format_plain(item) for item in value)
    if is_number(value):
        return format_number(value)
    return str(value)


def _format_version(value: Any) -> str:
    text = _format_bytes(value) if isinstance(value, bytes) else str(value)
    if len(text) == 4 and text.isdigit():
        return f"{int(text[:2])}.{text[2:]}"
    return text


def _format_dms(value: Any) -> str:
    if isinstance(value, (tuple, list)) and len(value) == 3 and all(is_number(part) for part in value):
        deg, minutes, sec = (format_number(part) for part in value)
        return f"{deg} deg {minutes} min {sec} sec"
    return _format_plain(value)


def _resolution_unit(lookup: Lookup) -> str:
    unit = lookup("ResolutionUnit")
    if unit == 3:
        return "cm"
    if unit == 1:
        return "unit"
    return "inch"


def render_value(name: str, value: Any, lookup: Lookup) -> str:
    """
    Render one EXIF value for display.

    `lookup` resolves sibling tags (e.g. ResolutionUnit for XResolution).
    """
    if name in ENUMERATIONS and isinstance(value, int):
        return ENUMERATIONS[name].get(value, f"unknown ({value})")
    if name == "Flash" and isinstance(value, int):
        return "fired" if value & 1 else "not fired"
    if name in VERSION_TAGS:
        return _format_version(value)
    if name in ("GPSLatitude", "GPSLongitude", "GPSDestLatitude", "GPSDestLongitude"):
        return _format_dms(value)
    if not is_number(value):
        # Wrong-typed entries (bytes, tuples, text) render verbatim.
        return _format_plain(value)
    if name == "ExposureTime":
        return f"{_format_fraction(value)} s"
    if name == "FNumber":
        return f"f/{format_number(value)}"
    if name in ("XResolution", "YResolution", "FocalPlaneXResolution", "FocalPlaneYResolution"):
        return f"{format_number(value)} pixels per {_resolution_unit(lookup)}"
    if name == "GPSAltitude":
        ref = lookup("GPSAltitudeRef")
        if isinstance(ref, bytes):
            ref = ref[0] if ref else 0
        side = "below sea level" if ref == 1 else "above sea level"
        return f"{format_number(value)} m {side}"
    if name in UNIT_SUFFIXES:
        return f"{format_number(value)} {UNIT_SUFFIXES[name]}"
    return _format_plain(value)
