"""
EXIF tag listing for informational reports.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from image_analysis.errors import ExifReadError
from image_analysis.imaging.exif_reader import ExifReader, PillowExifReader

LOGGER = logging.getLogger(__name__)

EXIF_FAILURE_LABEL = "Failed to read EXIF data"

TagPair = Tuple[str, str]


def parse_exif_tags(image_data: bytes, reader: ExifReader | None = None) -> List[TagPair]:
    """
    Return (tag name, display value) pairs in container order.

    A read failure yields a single (EXIF_FAILURE_LABEL, reason) pair instead of raising.
    """
    reader = reader or PillowExifReader()
    try:
        container = reader.read(image_data)
    except ExifReadError as exc:
        LOGGER.debug("EXIF tag parse failed: %s", exc)
        return [(EXIF_FAILURE_LABEL, str(exc))]
    pairs: List[TagPair] = []
    for name, value, _ifd in container.fields():
        try:
            display = container.display_value(name, value)
        except (ValueError, TypeError, ArithmeticError) as exc:
            LOGGER.debug("Cannot render EXIF %s=%r: %s", name, value, exc)
            display = repr(value)
        pairs.append((name, display))
    return pairs
