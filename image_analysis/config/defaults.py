"""
Default configuration values.
"""

from __future__ import annotations

DEFAULTS: dict[str, object] = {
    "palette": {
        "max_colors": 20,
        "saturation_threshold": 0.1,
        "brightness_threshold": 0.1,
        "hue_threshold": 10.0,
    },
    "logging": {"level": "info", "dir": ""},
}
