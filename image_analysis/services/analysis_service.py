"""
Image analysis: EXIF tag listing plus a perceptual color palette.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from image_analysis.core.colors import ColorThresholds, extract_unique_colors
from image_analysis.core.orientation import apply_orientation, read_orientation
from image_analysis.core.tags import TagPair, parse_exif_tags
from image_analysis.imaging.codec import ImageCodec, PillowCodec
from image_analysis.imaging.exif_reader import ExifReader, PillowExifReader

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageAnalysis:
    """Result handed back to the caller."""

    exif_data: tuple[TagPair, ...]
    unique_colors: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "exif_data": [[name, value] for name, value in self.exif_data],
            "unique_colors": list(self.unique_colors),
        }


class AnalysisService:
    """Analyze encoded image bytes."""

    def __init__(
        self,
        codec: ImageCodec | None = None,
        exif_reader: ExifReader | None = None,
        thresholds: ColorThresholds | None = None,
    ) -> None:
        self.codec = codec or PillowCodec()
        self.exif_reader = exif_reader or PillowExifReader()
        self.thresholds = thresholds or ColorThresholds()

    def analyze(self, image_data: bytes) -> ImageAnalysis:
        """
        Build the tag list and palette for `image_data`.

        Raises ImageDecodeError when the bytes are not a decodable image; EXIF
        problems are reported inside `exif_data` instead.
        """
        exif_data = parse_exif_tags(image_data, reader=self.exif_reader)
        image = self.codec.decode(image_data)
        orientation = read_orientation(image_data, reader=self.exif_reader)
        image = apply_orientation(image, orientation, codec=self.codec)
        unique_colors = extract_unique_colors(image, self.thresholds, codec=self.codec)
        LOGGER.info(
            "Analyzed image: %d EXIF tags, %d palette colors, orientation %d",
            len(exif_data),
            len(unique_colors),
            orientation,
        )
        return ImageAnalysis(exif_data=tuple(exif_data), unique_colors=tuple(unique_colors))


def analyze_image(image_data: bytes, thresholds: ColorThresholds | None = None) -> ImageAnalysis:
    return AnalysisService(thresholds=thresholds).analyze(image_data)
