"""
Configuration loader.
"""

from __future__ import annotations

import copy
import tomllib
from pathlib import Path
from typing import Any

from image_analysis.config.defaults import DEFAULTS

THRESHOLD_KEYS = ("saturation_threshold", "brightness_threshold", "hue_threshold")


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries without mutating the originals."""
    merged: dict[str, Any] = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path) -> dict[str, Any]:
    """
    Load a TOML config file and merge it over defaults.
    Missing files return defaults; malformed files or palette values raise ValueError.
    """
    if path.is_dir():
        raise IsADirectoryError(f"Config path points to a directory: {path}")

    user_config: dict[str, Any] = {}
    if path.exists():
        try:
            with path.open("rb") as fh:
                user_config = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid config file {path}: {exc}") from exc

    merged = _deep_merge(DEFAULTS, user_config)
    _validate_palette(merged.get("palette", {}), path)
    return merged


def _validate_palette(palette: Any, path: Path) -> None:
    """Thresholds must be numbers; max_colors a positive integer."""
    if not isinstance(palette, dict):
        raise ValueError(f"[palette] in {path} must be a table")
    for key in THRESHOLD_KEYS:
        value = palette.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"palette.{key} in {path} must be a number, got {value!r}")
    max_colors = palette.get("max_colors")
    if isinstance(max_colors, bool) or not isinstance(max_colors, int) or max_colors < 1:
        raise ValueError(f"palette.max_colors in {path} must be a positive integer, got {max_colors!r}")
