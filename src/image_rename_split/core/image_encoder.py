#!/usr/bin/env python3
"""
image_encoder.py: Decode source images, build preview thumbnails and encode them as base64 JPEG strings.

The thumbnail string is prefixed with a data-URI scheme so a presentation layer
can display it inline without touching the filesystem again.
"""

import base64
import io
from pathlib import Path
from typing import Union

from PIL import Image

from ..config import THUMBNAIL_SIZE, THUMBNAIL_QUALITY, THUMBNAIL_DATA_URI_PREFIX
from ..utils.log_utils import get_logger
from .errors import DecodeError

logger = get_logger(__name__)

# Errors Pillow raises for missing, truncated or unrecognised files
DECODE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


def encode_base64(data: bytes) -> str:
    """Encode bytes with the standard alphabet and '=' padding, without line wrapping."""
    return base64.b64encode(data).decode("ascii")


def decode_image(path: Union[str, Path]) -> Image.Image:
    """
    Open and fully decode the image at `path`.

    Raises:
        DecodeError: if the file is missing, unreadable or not a raster image.
    """
    try:
        img = Image.open(path)
    except DECODE_ERRORS as err:
        raise DecodeError(f"Cannot decode image '{path}': {err}") from err
    try:
        img.load()
    except DECODE_ERRORS as err:
        img.close()
        raise DecodeError(f"Cannot decode image '{path}': {err}") from err
    return img


def encode_jpeg(img: Image.Image, quality: int) -> bytes:
    """Encode `img` as a baseline JPEG at `quality` and return the raw bytes."""
    if img.mode != "RGB":
        img = img.convert("RGB")
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def create_thumbnail(path: Union[str, Path]) -> bytes:
    """
    Downsample the image at `path` so both sides fit in THUMBNAIL_SIZE,
    keeping the aspect ratio, and return it JPEG-encoded.
    """
    with decode_image(path) as img:
        thumb = img.copy()
    try:
        thumb.thumbnail((THUMBNAIL_SIZE, THUMBNAIL_SIZE), Image.Resampling.LANCZOS)
        return encode_jpeg(thumb, THUMBNAIL_QUALITY)
    except DECODE_ERRORS as err:
        raise DecodeError(f"Cannot build thumbnail for '{path}': {err}") from err


def thumbnail_data_uri(path: Union[str, Path]) -> str:
    """Return the thumbnail of `path` as an inline `data:image/jpeg;base64,...` string."""
    logger.debug("Building thumbnail for '%s'", path)
    return THUMBNAIL_DATA_URI_PREFIX + encode_base64(create_thumbnail(path))
