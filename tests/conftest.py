"""Shared fixtures: real JPEG files built with Pillow."""

import struct
from pathlib import Path

import pytest
from PIL import Image


def write_jpeg(path: Path, size=(800, 600), color=(200, 30, 30)) -> Path:
    """Write a solid-colour JPEG of `size` to `path`."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color=color).save(path, format="JPEG", quality=90)
    return path


def strip_app0(data: bytes) -> bytes:
    """Remove every APP0 segment from a JPEG header."""
    out = bytearray(data[:2])
    i = 2
    while i + 4 <= len(data) and data[i] == 0xFF and data[i + 1] != 0xDA:
        (length,) = struct.unpack(">H", data[i + 2:i + 4])
        if data[i + 1] != 0xE0:
            out += data[i:i + 2 + length]
        i += 2 + length
    out += data[i:]
    return bytes(out)


@pytest.fixture
def make_jpeg(tmp_path):
    """Factory writing JPEGs under a temporary source directory."""
    src_dir = tmp_path / "src"

    def _make(name: str, size=(800, 600), color=(200, 30, 30)) -> Path:
        return write_jpeg(src_dir / name, size=size, color=color)

    return _make


@pytest.fixture
def jpeg_bytes():
    """Encoded bytes of a small Pillow JPEG (Pillow writes a JFIF header)."""
    import io

    buffer = io.BytesIO()
    Image.new("RGB", (32, 16), color=(10, 120, 200)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def without_app0():
    return strip_app0
