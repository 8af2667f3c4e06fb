"""
jfif.py: Read and patch the pixel density stored in a JPEG's JFIF APP0 segment.

A JPEG stream is a sequence of marker segments:

    FF D8                       Start-Of-Image
    FF xx LL LL <payload>       segment, length LL LL includes itself
    ...
    FF DA ...                   Start-Of-Scan, entropy-coded data follows

The JFIF APP0 payload is laid out as

    offset  size  field
    0       5     identifier "JFIF\\0"
    5       2     version (major, minor)
    7       1     density units (0 = aspect only, 1 = dots/inch, 2 = dots/cm)
    8       2     X density, big endian
    10      2     Y density, big endian
    12      2     thumbnail width, height
"""

import struct
from typing import Iterator, Optional, Tuple, Union

from ..config import TARGET_DPI
from ..utils.log_utils import get_logger
from .errors import InvalidContainerError

logger = get_logger(__name__)

SOI = b"\xff\xd8"
MARKER_SOS = 0xDA
MARKER_APP0 = 0xE0
JFIF_IDENTIFIER = b"JFIF\x00"
UNITS_DPI = 1

# offsets relative to the start of the segment (the 0xFF byte)
_UNITS_OFFSET = 11
_LAST_DENSITY_BYTE = 15

_JFIF_SEGMENT = struct.Struct(">BBH5sBBBHHBB")
JFIF_SEGMENT_SIZE = _JFIF_SEGMENT.size  # 18


def _check_soi(buf: Union[bytes, bytearray]) -> None:
    if len(buf) < 4 or buf[:2] != SOI:
        raise InvalidContainerError("Not a valid JPEG: missing Start-Of-Image marker")


def iter_segments(buf: Union[bytes, bytearray]) -> Iterator[Tuple[int, int, int]]:
    """
    Yield (offset, marker, length) for every header segment after SOI.

    Stops at Start-Of-Scan, at the first byte that is not a marker prefix,
    or at a length field that cannot be valid.
    """
    i = 2
    while i + 4 <= len(buf):
        if buf[i] != 0xFF:
            break
        marker = buf[i + 1]
        if marker == MARKER_SOS:
            break
        (length,) = struct.unpack_from(">H", buf, i + 2)
        if length < 2:
            break
        yield i, marker, length
        i += 2 + length


def _find_jfif(buf: Union[bytes, bytearray]) -> Optional[int]:
    for offset, marker, _ in iter_segments(buf):
        if marker != MARKER_APP0:
            continue
        if buf[offset + 4:offset + 9] == JFIF_IDENTIFIER and offset + _LAST_DENSITY_BYTE < len(buf):
            return offset
    return None


def build_jfif_segment(dpi: int = TARGET_DPI) -> bytes:
    """Return a minimal APP0/JFIF 1.2 segment declaring `dpi` in both directions."""
    return _JFIF_SEGMENT.pack(
        0xFF, MARKER_APP0,
        JFIF_SEGMENT_SIZE - 2,
        JFIF_IDENTIFIER,
        1, 2,
        UNITS_DPI,
        dpi, dpi,
        0, 0,
    )


def set_jpeg_dpi(buf: Union[bytes, bytearray], dpi: int = TARGET_DPI) -> bytearray:
    """
    Set the density of the first JFIF segment in `buf` to `dpi` dots per inch.

    When the header has no JFIF segment, one is inserted right after SOI and
    the buffer grows by JFIF_SEGMENT_SIZE bytes. A bytearray argument is
    modified in place; the patched buffer is returned either way.

    Raises:
        InvalidContainerError: if `buf` does not start with a JPEG SOI marker.
        ValueError: if `dpi` does not fit the 16 bit density fields.
    """
    if not 0 <= dpi <= 0xFFFF:
        raise ValueError(f"DPI out of range: {dpi}")
    _check_soi(buf)
    if not isinstance(buf, bytearray):
        buf = bytearray(buf)

    offset = _find_jfif(buf)
    if offset is not None:
        struct.pack_into(">BHH", buf, offset + _UNITS_OFFSET, UNITS_DPI, dpi, dpi)
        logger.debug("Patched JFIF segment at offset %d to %d dpi", offset, dpi)
        return buf

    buf[2:2] = build_jfif_segment(dpi)
    logger.debug("Inserted JFIF segment with %d dpi", dpi)
    return buf


def read_jfif_density(buf: Union[bytes, bytearray]) -> Optional[Tuple[int, int, int]]:
    """
    Return (units, x_density, y_density) from the first JFIF segment.

    Returns None when the header has no JFIF segment or `buf` is not a JPEG.
    """
    if len(buf) < 4 or buf[:2] != SOI:
        return None
    offset = _find_jfif(buf)
    if offset is None:
        return None
    return struct.unpack_from(">BHH", buf, offset + _UNITS_OFFSET)
