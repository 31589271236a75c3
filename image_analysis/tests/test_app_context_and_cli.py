from __future__ import annotations

import json
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from image_analysis.app_context import ENV_CONFIG_DIR, default_config_path, initialize_app, resolve_log_dir
from image_analysis.cli import main


def _write_png(path: Path, color: tuple[int, int, int] = (0, 128, 255)) -> Path:
    Image.new("RGB", (6, 4), color=color).save(path, format="PNG")
    return path


def test_default_config_path_honors_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_CONFIG_DIR, str(tmp_path))
    assert default_config_path() == tmp_path / "config.toml"


def test_initialize_app_reads_thresholds(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[palette]\nmax_colors = 3\n", encoding="utf-8")

    context = initialize_app(config_path=config_path)

    assert context.thresholds.max_colors == 3
    assert context.analysis_service.thresholds is context.thresholds
    assert context.config_path == config_path


def test_initialize_app_creates_log_dir(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[logging]\ndir = "logs"\n', encoding="utf-8")

    initialize_app(config_path=config_path, base_dir=tmp_path)

    assert (tmp_path / "logs").is_dir()


def test_resolve_log_dir_empty_means_console_only() -> None:
    assert resolve_log_dir({"logging": {"dir": ""}}) is None


def test_cli_analyze_prints_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    image_path = _write_png(tmp_path / "in.png")

    code = main(["--config", str(tmp_path / "config.toml"), "analyze", str(image_path)])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["unique_colors"] == ["#0080FF"]
    assert payload["exif_data"][0][0] == "Failed to read EXIF data"


def test_cli_resize_writes_output(tmp_path: Path) -> None:
    image_path = _write_png(tmp_path / "in.png")
    out_path = tmp_path / "out.bmp"

    code = main(
        [
            "--config",
            str(tmp_path / "config.toml"),
            "resize",
            str(image_path),
            str(out_path),
            "--width",
            "9",
            "--height",
            "7",
            "--format",
            "bmp",
        ]
    )

    assert code == 0
    with Image.open(BytesIO(out_path.read_bytes())) as resized:
        assert resized.format == "BMP"
        assert resized.size == (9, 7)


def test_cli_reports_decode_failure(tmp_path: Path) -> None:
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"nope")

    code = main(["--config", str(tmp_path / "config.toml"), "analyze", str(bad)])

    assert code == 1
