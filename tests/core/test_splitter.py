"""Tests for splitting an image into numbered halves."""

import pytest
from PIL import Image

from image_rename_split.core import splitter
from image_rename_split.core.errors import DecodeError, InvalidContainerError, IoError
from image_rename_split.core.jfif import read_jfif_density
from image_rename_split.core.models import ImageItem, ProcessingJob
from image_rename_split.core.splitter import output_paths, pad_number, split_halves, split_image
from image_rename_split.core.workers import process_job


@pytest.mark.parametrize("num, expected", [(1, "01"), (7, "07"), (10, "10"), (99, "99"), (100, "100"), (1234, "1234")])
def test_pad_number(num, expected):
    assert pad_number(num) == expected


def test_output_paths(tmp_path):
    left, right = output_paths(tmp_path, 3)
    assert left == tmp_path / "03_1.jpg"
    assert right == tmp_path / "03_2.jpg"


@pytest.mark.parametrize("width", [2, 100, 101, 799, 800])
def test_split_halves_geometry(width):
    img = Image.new("RGB", (width, 37))
    left, right = split_halves(img)
    assert left.width + right.width == width
    assert left.height == right.height == 37
    assert left.width == width // 2
    assert right.width == width - width // 2


def test_split_halves_keeps_pixels():
    img = Image.new("RGB", (4, 1))
    for x, color in enumerate([(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)]):
        img.putpixel((x, 0), color)
    left, right = split_halves(img)
    assert left.getpixel((1, 0)) == (0, 255, 0)
    assert right.getpixel((0, 0)) == (0, 0, 255)


def test_split_image_writes_two_halves(make_jpeg, tmp_path):
    source = make_jpeg("page.jpg", size=(801, 600))
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    left_path, right_path = split_image(source, out_dir, 5)

    assert left_path == out_dir / "05_1.jpg"
    assert right_path == out_dir / "05_2.jpg"
    with Image.open(left_path) as left, Image.open(right_path) as right:
        assert left.format == right.format == "JPEG"
        assert left.size == (400, 600)
        assert right.size == (401, 600)
    for path in (left_path, right_path):
        assert read_jfif_density(path.read_bytes()) == (1, 300, 300)


def test_split_image_converts_non_rgb(tmp_path):
    source = tmp_path / "gray.jpg"
    Image.new("L", (60, 20), color=128).save(source, format="JPEG")
    left_path, _ = split_image(source, tmp_path, 1)
    with Image.open(left_path) as img:
        assert img.size == (30, 20)
        assert img.info["jfif_density"] == (300, 300)


def test_split_image_missing_source(tmp_path):
    with pytest.raises(DecodeError):
        split_image(tmp_path / "gone.jpg", tmp_path, 1)


def test_split_image_unwritable_destination(make_jpeg, tmp_path):
    source = make_jpeg("page.jpg", size=(40, 20))
    with pytest.raises(IoError):
        split_image(source, tmp_path / "does" / "not" / "exist", 1)


def test_split_image_rejects_encoder_output_without_soi(make_jpeg, tmp_path, monkeypatch):
    """A half that does not encode to a JPEG container is never written."""
    source = make_jpeg("page.jpg", size=(40, 20))
    monkeypatch.setattr(splitter, "encode_jpeg", lambda img, quality: b"\x89PNG\r\n\x1a\n" + b"\x00" * 16)

    with pytest.raises(InvalidContainerError):
        split_image(source, tmp_path, 4)
    assert not (tmp_path / "04_1.jpg").exists()
    assert not (tmp_path / "04_2.jpg").exists()

    result = process_job(ProcessingJob(
        items=[ImageItem(id=0, source_path=source, thumbnail_data="")],
        destination_root=tmp_path / "dest",
    ))
    assert result.ok
    assert [o.sequence_number for o in result.failed] == [1]
    assert isinstance(result.failed[0].error, InvalidContainerError)
    assert list((tmp_path / "dest" / "SPL").iterdir()) == []


def test_split_image_too_narrow(tmp_path):
    source = tmp_path / "sliver.jpg"
    Image.new("RGB", (1, 20)).save(source, format="JPEG")
    with pytest.raises(DecodeError, match="too narrow"):
        split_image(source, tmp_path, 1)
    assert not (tmp_path / "01_1.jpg").exists()
