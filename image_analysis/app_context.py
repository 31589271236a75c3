"""
Application bootstrap helpers.

Responsibilities:
- Locate/load configuration.
- Configure logging.
- Build the codec, EXIF reader, and services the CLI uses.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from image_analysis.config.loader import load_config
from image_analysis.core.colors import ColorThresholds
from image_analysis.imaging.codec import PillowCodec
from image_analysis.imaging.exif_reader import PillowExifReader
from image_analysis.logging.setup import setup_logging
from image_analysis.services.analysis_service import AnalysisService
from image_analysis.services.resize_service import ResizeService

ENV_CONFIG_DIR = "IMAGE_ANALYSIS_CONFIG_DIR"


@dataclass
class AppContext:
    """Shared context for CLI commands."""

    config: dict[str, Any]
    config_path: Path
    thresholds: ColorThresholds
    analysis_service: AnalysisService
    resize_service: ResizeService


def default_config_dir() -> Path:
    """Return the directory to hold config files, honoring env override."""
    override = os.getenv(ENV_CONFIG_DIR)
    if override:
        return Path(override)
    return Path.home() / ".image_analysis"


def default_config_path() -> Path:
    return default_config_dir() / "config.toml"


def resolve_log_dir(config: dict[str, Any], base_dir: Path | None = None) -> Path | None:
    """Relative log dirs resolve against base_dir or CWD; empty means console only."""
    raw = str(config.get("logging", {}).get("dir", "") or "")
    if not raw:
        return None
    log_dir = Path(raw)
    return log_dir if log_dir.is_absolute() else (base_dir or Path.cwd()) / log_dir


def initialize_app(config_path: Path | None = None, base_dir: Path | None = None) -> AppContext:
    """
    Load configuration, set up logging, and return an AppContext.
    """
    config_path = config_path or default_config_path()
    config = load_config(config_path)

    setup_logging(
        log_dir=resolve_log_dir(config, base_dir=base_dir),
        level=str(config.get("logging", {}).get("level", "INFO")),
    )

    thresholds = ColorThresholds.from_config(config)
    codec = PillowCodec()
    exif_reader = PillowExifReader()
    return AppContext(
        config=config,
        config_path=config_path,
        thresholds=thresholds,
        analysis_service=AnalysisService(codec=codec, exif_reader=exif_reader, thresholds=thresholds),
        resize_service=ResizeService(codec=codec, exif_reader=exif_reader),
    )
