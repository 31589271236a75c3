"""
EXIF orientation: read the code from metadata and undo it geometrically.
"""

from __future__ import annotations

import logging
from typing import Any

from image_analysis.errors import ExifReadError
from image_analysis.imaging.codec import ImageCodec, PillowCodec, Transform
from image_analysis.imaging.exif_reader import PRIMARY_IFD, ExifReader, PillowExifReader

LOGGER = logging.getLogger(__name__)

DEFAULT_ORIENTATION = 1

# Steps run left to right; flip and rotate do not commute (codes 5 and 7).
ORIENTATION_TRANSFORMS: dict[int, tuple[Transform, ...]] = {
    1: (),
    2: (Transform.FLIP_H,),
    3: (Transform.ROTATE_180,),
    4: (Transform.FLIP_V,),
    5: (Transform.FLIP_H, Transform.ROTATE_270),
    6: (Transform.ROTATE_90,),
    7: (Transform.FLIP_H, Transform.ROTATE_90),
    8: (Transform.ROTATE_270,),
}


def _as_uint(value: Any) -> int | None:
    if isinstance(value, (tuple, list)):
        value = value[0] if value else None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def read_orientation(image_data: bytes, reader: ExifReader | None = None) -> int:
    """Return the EXIF orientation code, or 1 when it is missing or unreadable."""
    reader = reader or PillowExifReader()
    try:
        container = reader.read(image_data)
    except ExifReadError as exc:
        LOGGER.debug("No orientation (EXIF unreadable: %s)", exc)
        return DEFAULT_ORIENTATION
    value = _as_uint(container.get_field("Orientation", PRIMARY_IFD))
    if value is None:
        return DEFAULT_ORIENTATION
    return value & 0xFFFF


def orientation_transforms(orientation: int) -> tuple[Transform, ...]:
    """Ordered steps that correct `orientation`; unknown codes map to identity."""
    return ORIENTATION_TRANSFORMS.get(orientation, ())


def apply_orientation(image: Any, orientation: int, codec: ImageCodec | None = None) -> Any:
    codec = codec or PillowCodec()
    for step in orientation_transforms(orientation):
        image = codec.transpose(image, step)
    return image
