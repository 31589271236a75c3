"""
Exception types raised across the analysis and resize pipelines.
"""

from __future__ import annotations


class ImageAnalysisError(Exception):
    """Base class for failures surfaced to callers."""


class ImageDecodeError(ImageAnalysisError, ValueError):
    """Input bytes could not be decoded into a pixel grid."""


class ImageEncodeError(ImageAnalysisError, ValueError):
    """A pixel grid could not be encoded into the requested format."""


class ExifReadError(ImageAnalysisError):
    """EXIF metadata could not be located or parsed."""
