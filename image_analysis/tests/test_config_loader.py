from pathlib import Path

import pytest

from image_analysis.config.defaults import DEFAULTS
from image_analysis.config.loader import load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    loaded = load_config(config_path)
    assert loaded == DEFAULTS
    assert loaded is not DEFAULTS  # caller can mutate safely


def test_load_config_merges_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
        [palette]
        hue_threshold = 15.0
        max_colors = 8

        [logging]
        level = "debug"
        """,
        encoding="utf-8",
    )

    loaded = load_config(config_path)

    assert loaded["palette"]["hue_threshold"] == 15.0
    assert loaded["palette"]["max_colors"] == 8
    assert loaded["palette"]["saturation_threshold"] == DEFAULTS["palette"]["saturation_threshold"]
    assert loaded["logging"]["level"] == "debug"
    assert loaded["logging"]["dir"] == DEFAULTS["logging"]["dir"]


def test_load_config_raises_value_error_on_bad_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("this is not valid toml", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(config_path)


def test_load_config_rejects_directory(tmp_path: Path) -> None:
    with pytest.raises(IsADirectoryError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "body",
    [
        '[palette]\nhue_threshold = "wide"\n',
        "[palette]\nsaturation_threshold = true\n",
        "[palette]\nmax_colors = 0\n",
        "[palette]\nmax_colors = 2.5\n",
        'palette = "none"\n',
    ],
)
def test_load_config_rejects_bad_palette_values(tmp_path: Path, body: str) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(body, encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(config_path)


def test_load_config_accepts_integer_thresholds(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[palette]\nhue_threshold = 12\n", encoding="utf-8")

    assert load_config(config_path)["palette"]["hue_threshold"] == 12
