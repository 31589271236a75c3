"""
Image analysis library: EXIF tag listing, perceptual palettes, and
orientation-aware resizing.
"""

from image_analysis.errors import ImageAnalysisError, ImageDecodeError, ImageEncodeError
from image_analysis.services.analysis_service import AnalysisService, ImageAnalysis, analyze_image
from image_analysis.services.resize_service import ResizeRequest, ResizeService, resize_image

__all__ = [
    "AnalysisService",
    "ImageAnalysis",
    "ImageAnalysisError",
    "ImageDecodeError",
    "ImageEncodeError",
    "ResizeRequest",
    "ResizeService",
    "analyze_image",
    "resize_image",
]
