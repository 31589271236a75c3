from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from image_analysis.core.colors import ColorThresholds
from image_analysis.core.tags import EXIF_FAILURE_LABEL
from image_analysis.errors import ImageDecodeError
from image_analysis.services.analysis_service import AnalysisService, ImageAnalysis, analyze_image

RED = (255, 0, 0)
SLATE = (60, 90, 120)


def _two_pixel_png(orientation: int | None = None) -> bytes:
    image = Image.new("RGB", (2, 1))
    image.putpixel((0, 0), RED)
    image.putpixel((1, 0), SLATE)
    exif = Image.Exif()
    if orientation is not None:
        exif[274] = orientation
    buffer = BytesIO()
    image.save(buffer, format="PNG", exif=exif)
    return buffer.getvalue()


def test_analyze_png_without_exif() -> None:
    analysis = analyze_image(_two_pixel_png())

    assert analysis.unique_colors == ("#FF0000", "#3C5A78")
    assert len(analysis.exif_data) == 1
    assert analysis.exif_data[0][0] == EXIF_FAILURE_LABEL


def test_analyze_applies_orientation_before_scanning() -> None:
    analysis = analyze_image(_two_pixel_png(orientation=2))

    assert analysis.unique_colors == ("#3C5A78", "#FF0000")
    assert ("Orientation", "row 0 at top and column 0 at right") in analysis.exif_data


def test_analyze_uses_configured_thresholds() -> None:
    service = AnalysisService(thresholds=ColorThresholds(max_colors=1))
    assert service.analyze(_two_pixel_png()).unique_colors == ("#FF0000",)


def test_analyze_rejects_undecodable_bytes() -> None:
    with pytest.raises(ImageDecodeError):
        analyze_image(b"not an image at all")


def test_to_dict_matches_wire_shape() -> None:
    analysis = ImageAnalysis(exif_data=(("Make", "Canon"),), unique_colors=("#FFFFFF",))
    assert analysis.to_dict() == {"exif_data": [["Make", "Canon"]], "unique_colors": ["#FFFFFF"]}
