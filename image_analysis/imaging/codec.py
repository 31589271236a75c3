"""
Image codec adapter (decode, encode, resample, geometric transforms).

The pipelines talk to the codec through the `ImageCodec` protocol so tests can
swap in a fake grid implementation. Formats and filters are passed as the
lowercase tags callers use ("png", "lanczos3", ...).
"""

from __future__ import annotations

import logging
from enum import Enum
from io import BytesIO
from typing import Any, Iterable, Protocol, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from image_analysis.errors import ImageDecodeError, ImageEncodeError

LOGGER = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class Transform(Enum):
    """Discrete geometric steps; rotations are clockwise."""

    IDENTITY = "identity"
    FLIP_H = "flip_h"
    FLIP_V = "flip_v"
    ROTATE_90 = "rotate90"
    ROTATE_180 = "rotate180"
    ROTATE_270 = "rotate270"


class ImageCodec(Protocol):
    def decode(self, data: bytes) -> Any: ...

    def encode(self, image: Any, fmt: str) -> bytes: ...

    def transpose(self, image: Any, transform: Transform) -> Any: ...

    def resize_to_fill(self, image: Any, width: int, height: int, filter_name: str) -> Any: ...

    def to_rgb(self, image: Any) -> Any: ...

    def rgb_pixels(self, image: Any) -> Iterable[RGB]: ...


# Pillow's ROTATE_* constants turn counter-clockwise.
_PIL_TRANSPOSE = {
    Transform.FLIP_H: Image.Transpose.FLIP_LEFT_RIGHT,
    Transform.FLIP_V: Image.Transpose.FLIP_TOP_BOTTOM,
    Transform.ROTATE_90: Image.Transpose.ROTATE_270,
    Transform.ROTATE_180: Image.Transpose.ROTATE_180,
    Transform.ROTATE_270: Image.Transpose.ROTATE_90,
}

RESAMPLING: dict[str, Image.Resampling] = {
    "catmull_rom": Image.Resampling.BICUBIC,
    "gaussian": Image.Resampling.HAMMING,
    "lanczos3": Image.Resampling.LANCZOS,
    "nearest": Image.Resampling.NEAREST,
    "triangle": Image.Resampling.BILINEAR,
}

PIL_FORMATS: dict[str, str] = {
    "png": "PNG",
    "webp": "WEBP",
    "jpeg": "JPEG",
    "avif": "AVIF",
    "bmp": "BMP",
    "gif": "GIF",
    "tiff": "TIFF",
    "ico": "ICO",
}

# Modes every supported writer accepts; anything else is converted first.
_WRITABLE_MODES = {"1", "L", "P", "RGB", "RGBA"}


class PillowCodec:
    """Pillow-backed codec."""

    def decode(self, data: bytes) -> Image.Image:
        try:
            image = Image.open(BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise ImageDecodeError(f"Failed to load image: {exc}") from exc
        return image

    def encode(self, image: Image.Image, fmt: str) -> bytes:
        pil_format = PIL_FORMATS[fmt]
        if image.mode not in _WRITABLE_MODES:
            target = "RGBA" if "A" in image.getbands() else "RGB"
            LOGGER.debug("Converting %s to %s before %s encode", image.mode, target, pil_format)
            image = image.convert(target)
        if "exif" in image.info:
            # Orientation is already applied to the pixels.
            image = image.copy()
            image.info.pop("exif")
        options: dict[str, Any] = {}
        if fmt == "ico":
            # Single entry at the real size; the default size ladder tops out below it.
            options["sizes"] = [image.size]
        buffer = BytesIO()
        try:
            image.save(buffer, format=pil_format, **options)
        except (OSError, KeyError, ValueError) as exc:
            raise ImageEncodeError(f"Failed to encode image as {fmt}: {exc}") from exc
        return buffer.getvalue()

    def transpose(self, image: Image.Image, transform: Transform) -> Image.Image:
        if transform is Transform.IDENTITY:
            return image
        return image.transpose(_PIL_TRANSPOSE[transform])

    def resize_to_fill(self, image: Image.Image, width: int, height: int, filter_name: str) -> Image.Image:
        """Scale to cover the box, then center-crop to exactly width x height."""
        # Pillow resamples "P" and "1" with NEAREST regardless of the method.
        if image.mode == "P":
            image = image.convert("RGBA" if image.has_transparency_data else "RGB")
        elif image.mode == "1":
            image = image.convert("L")
        return ImageOps.fit(image, (width, height), method=RESAMPLING[filter_name])

    def to_rgb(self, image: Image.Image) -> Image.Image:
        return image if image.mode == "RGB" else image.convert("RGB")

    def rgb_pixels(self, image: Image.Image) -> Iterable[RGB]:
        grid = np.asarray(self.to_rgb(image), dtype=np.uint8).reshape(-1, 3)
        return map(tuple, grid.tolist())
