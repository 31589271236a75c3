"""
Resize pipeline: decode, undo EXIF orientation, fill the target box, re-encode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from image_analysis.core.orientation import apply_orientation, read_orientation
from image_analysis.imaging.codec import ImageCodec, PillowCodec
from image_analysis.imaging.exif_reader import ExifReader, PillowExifReader

LOGGER = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("png", "webp", "jpeg", "avif", "bmp", "gif", "tiff", "ico")
SUPPORTED_FILTERS = ("catmull_rom", "gaussian", "lanczos3", "nearest", "triangle")
DEFAULT_FORMAT = "png"
DEFAULT_FILTER = "triangle"

# Formats with no alpha channel; pixels are flattened to RGB before resizing.
OPAQUE_FORMATS = {"jpeg"}


@dataclass(frozen=True)
class ResizeRequest:
    width: int
    height: int
    format: str = DEFAULT_FORMAT
    filter: str = DEFAULT_FILTER


def resolve_format(tag: str) -> str:
    if tag in SUPPORTED_FORMATS:
        return tag
    LOGGER.debug("Unknown output format %r, using %s", tag, DEFAULT_FORMAT)
    return DEFAULT_FORMAT


def resolve_filter(tag: str) -> str:
    if tag in SUPPORTED_FILTERS:
        return tag
    LOGGER.debug("Unknown resampling filter %r, using %s", tag, DEFAULT_FILTER)
    return DEFAULT_FILTER


class ResizeService:
    """Resize and re-encode images with orientation baked in."""

    def __init__(self, codec: ImageCodec | None = None, exif_reader: ExifReader | None = None) -> None:
        self.codec = codec or PillowCodec()
        self.exif_reader = exif_reader or PillowExifReader()

    def resize(self, image_data: bytes, request: ResizeRequest) -> bytes:
        """
        Return `image_data` re-encoded at exactly request.width x request.height.

        Dimensions are not validated; decode and encode failures propagate.
        """
        image = self.codec.decode(image_data)
        orientation = read_orientation(image_data, reader=self.exif_reader)
        image = apply_orientation(image, orientation, codec=self.codec)

        output_format = resolve_format(request.format)
        if output_format in OPAQUE_FORMATS:
            image = self.codec.to_rgb(image)

        filter_name = resolve_filter(request.filter)
        resized = self.codec.resize_to_fill(image, request.width, request.height, filter_name)
        encoded = self.codec.encode(resized, output_format)
        LOGGER.info(
            "Resized image to %dx%d (%s, %s, orientation %d): %d bytes",
            request.width,
            request.height,
            output_format,
            filter_name,
            orientation,
            len(encoded),
        )
        return encoded


def resize_image(
    image_data: bytes, width: int, height: int, format: str = DEFAULT_FORMAT, filter: str = DEFAULT_FILTER
) -> bytes:
    return ResizeService().resize(image_data, ResizeRequest(width=width, height=height, format=format, filter=filter))
