"""
Command-line entry point.

Usage:
    python -m image_analysis.cli analyze IMAGE
    python -m image_analysis.cli resize IMAGE OUT --width W --height H [--format F] [--filter K]
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from image_analysis.app_context import AppContext, initialize_app
from image_analysis.errors import ImageAnalysisError
from image_analysis.services.resize_service import (
    DEFAULT_FILTER,
    DEFAULT_FORMAT,
    SUPPORTED_FILTERS,
    SUPPORTED_FORMATS,
    ResizeRequest,
)

LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Analyze or resize images.")
    parser.add_argument("--config", type=Path, help="TOML config path (defaults to ~/.image_analysis/config.toml).")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Print EXIF tags and palette as JSON.")
    analyze.add_argument("image", type=Path)

    resize = sub.add_parser("resize", help="Resize and re-encode an image.")
    resize.add_argument("image", type=Path)
    resize.add_argument("output", type=Path)
    resize.add_argument("--width", type=int, required=True)
    resize.add_argument("--height", type=int, required=True)
    resize.add_argument(
        "--format", default=DEFAULT_FORMAT, help=f"One of {', '.join(SUPPORTED_FORMATS)} (unknown -> {DEFAULT_FORMAT})."
    )
    resize.add_argument(
        "--filter", default=DEFAULT_FILTER, help=f"One of {', '.join(SUPPORTED_FILTERS)} (unknown -> {DEFAULT_FILTER})."
    )
    return parser


def _run(context: AppContext, args: argparse.Namespace) -> int:
    data = args.image.read_bytes()
    if args.command == "analyze":
        analysis = context.analysis_service.analyze(data)
        print(json.dumps(analysis.to_dict(), indent=2))
        return 0
    request = ResizeRequest(width=args.width, height=args.height, format=args.format, filter=args.filter)
    args.output.write_bytes(context.resize_service.resize(data, request))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    context = initialize_app(config_path=args.config)
    try:
        return _run(context, args)
    except ImageAnalysisError as exc:
        LOGGER.error("%s failed for %s: %s", args.command, args.image, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
