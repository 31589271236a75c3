"""
EXIF container reader backed by Pillow.

Walks IFD0 plus the Exif, GPS and Interop sub-IFDs and exposes the fields by
tag name, together with their display rendering.
"""

from __future__ import annotations

import logging
import struct
from io import BytesIO
from typing import Any, Iterator, Mapping, Protocol, Tuple

from PIL import ExifTags, Image, UnidentifiedImageError

from image_analysis.errors import ExifReadError
from image_analysis.imaging.exif_display import render_value

LOGGER = logging.getLogger(__name__)

PRIMARY_IFD = "IFD0"
NO_EXIF_MESSAGE = "No Exif data found"

# Offsets into sub-IFDs; the sub-IFD contents are reported instead.
POINTER_TAGS = {int(ExifTags.IFD.Exif), int(ExifTags.IFD.GPSInfo), int(ExifTags.IFD.Interop)}
MAKER_NOTE_TAG = 0x927C

ExifField = Tuple[str, Any, str]


class ExifContainer(Protocol):
    def get_field(self, name: str, ifd: str = PRIMARY_IFD) -> Any | None: ...

    def fields(self) -> Iterator[ExifField]: ...

    def display_value(self, name: str, value: Any) -> str: ...


class ExifReader(Protocol):
    def read(self, data: bytes) -> ExifContainer: ...


def _tag_name(tag_id: int, lookup: Mapping[int, str]) -> str:
    return lookup.get(tag_id, f"Tag 0x{tag_id:04X}")


class PillowExifContainer:
    """Parsed EXIF fields in IFD order."""

    def __init__(self, entries: list[ExifField]) -> None:
        self._entries = entries

    def get_field(self, name: str, ifd: str = PRIMARY_IFD) -> Any | None:
        for tag_name, value, tag_ifd in self._entries:
            if tag_name == name and tag_ifd == ifd:
                return value
        return None

    def _lookup_any(self, name: str) -> Any | None:
        for tag_name, value, _ifd in self._entries:
            if tag_name == name:
                return value
        return None

    def fields(self) -> Iterator[ExifField]:
        return iter(self._entries)

    def display_value(self, name: str, value: Any) -> str:
        return render_value(name, value, self._lookup_any)


class PillowExifReader:
    """Locate and parse the EXIF block of any container Pillow can open."""

    def read(self, data: bytes) -> PillowExifContainer:
        try:
            with Image.open(BytesIO(data)) as image:
                exif = image.getexif()
                entries = self._collect(exif)
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError, KeyError, struct.error) as exc:
            raise ExifReadError(str(exc)) from exc
        if not entries:
            raise ExifReadError(NO_EXIF_MESSAGE)
        return PillowExifContainer(entries)

    def _collect(self, exif: Image.Exif) -> list[ExifField]:
        entries: list[ExifField] = []
        for tag_id, value in exif.items():
            if tag_id in POINTER_TAGS:
                continue
            entries.append((_tag_name(tag_id, ExifTags.TAGS), value, PRIMARY_IFD))

        exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
        for tag_id, value in exif_ifd.items():
            if tag_id in POINTER_TAGS or tag_id == MAKER_NOTE_TAG:
                continue
            entries.append((_tag_name(tag_id, ExifTags.TAGS), value, "Exif"))

        for tag_id, value in exif.get_ifd(ExifTags.IFD.GPSInfo).items():
            entries.append((_tag_name(tag_id, ExifTags.GPSTAGS), value, "GPS"))

        if int(ExifTags.IFD.Interop) in exif_ifd:
            for tag_id, value in exif.get_ifd(ExifTags.IFD.Interop).items():
                entries.append((_tag_name(tag_id, ExifTags.TAGS), value, "Interop"))
        LOGGER.debug("Read %d EXIF fields", len(entries))
        return entries
