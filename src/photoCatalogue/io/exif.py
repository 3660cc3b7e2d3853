"""Metadata readers for still images."""

from __future__ import annotations

import struct
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from PIL import ExifTags, Image, UnidentifiedImageError

from ..utils.logging import get_logger

LOGGER = get_logger()

_EXIF_DATETIME_FORMATS = ("%Y:%m:%d %H:%M:%S", "%Y-%m-%d %H:%M:%S")

# Pillow surfaces corrupt EXIF blocks through several exception types
# depending on where the decoder gives up.
_DECODE_ERRORS = (OSError, ValueError, SyntaxError, struct.error, UnidentifiedImageError)


def _empty_image_info() -> Dict[str, Any]:
    """Return a metadata stub used whenever inspection fails."""

    return {"w": None, "h": None, "dt": None}


def _normalise_exif_datetime(value: Any) -> Optional[datetime]:
    """Parse an EXIF timestamp into a naive local :class:`datetime`.

    EXIF stores ``YYYY:MM:DD HH:MM:SS``; some tools write dashes in the date
    part instead, so both spellings are accepted.
    """

    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    if not isinstance(value, str):
        return None
    candidate = value.strip().strip("\x00").strip()
    if not candidate:
        return None
    for fmt in _EXIF_DATETIME_FORMATS:
        try:
            return datetime.strptime(candidate, fmt)
        except ValueError:
            continue
    return None


def _extract_datetime_digitized(image: Image.Image) -> Optional[datetime]:
    exif = image.getexif()
    tag = ExifTags.Base.DateTimeDigitized
    value = exif.get_ifd(ExifTags.IFD.Exif).get(tag)
    if value is None:
        # A few writers put the tag straight into IFD0.
        value = exif.get(tag)
    return _normalise_exif_datetime(value)


def read_image_meta(path: Path, *, with_exif: bool = True) -> Dict[str, Any]:
    """Return width, height and ``DateTimeDigitized`` for the image at *path*.

    Every field is ``None`` when the file is missing or cannot be decoded;
    a damaged EXIF block only clears ``dt``.
    """

    info = _empty_image_info()
    try:
        with Image.open(path) as image:
            info["w"], info["h"] = image.size
            if with_exif:
                try:
                    info["dt"] = _extract_datetime_digitized(image)
                except _DECODE_ERRORS as exc:
                    LOGGER.debug("Ignoring unreadable EXIF block in %s: %s", path, exc)
    except FileNotFoundError:
        LOGGER.debug("Image %s does not exist", path)
    except _DECODE_ERRORS as exc:
        LOGGER.debug("Could not open image %s: %s", path, exc)
    return info


def read_datetime_digitized(path: Path) -> Optional[datetime]:
    """Return the EXIF ``DateTimeDigitized`` of *path*, or ``None``."""

    return read_image_meta(path)["dt"]


__all__ = ["read_datetime_digitized", "read_image_meta"]
