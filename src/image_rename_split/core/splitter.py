"""
splitter.py: Cut a source image into left and right halves and save them as numbered JPEG files.
"""

from pathlib import Path
from typing import Tuple, Union

from PIL import Image

from ..config import SPLIT_QUALITY, TARGET_DPI, SEQUENCE_WIDTH
from ..utils.log_utils import get_logger
from .errors import DecodeError, IoError
from .image_encoder import DECODE_ERRORS, decode_image, encode_jpeg
from .jfif import set_jpeg_dpi

logger = get_logger(__name__)


def pad_number(num: int) -> str:
    """Zero-pad `num` to SEQUENCE_WIDTH digits; wider numbers are kept whole."""
    return f"{num:0{SEQUENCE_WIDTH}d}"


def output_paths(folder: Path, sequence_number: int) -> Tuple[Path, Path]:
    """Return the (left, right) file paths for `sequence_number` in `folder`."""
    prefix = pad_number(sequence_number)
    return folder / f"{prefix}_1.jpg", folder / f"{prefix}_2.jpg"


def split_halves(img: Image.Image) -> Tuple[Image.Image, Image.Image]:
    """
    Crop `img` into left and right halves of full height.

    For odd widths the left half is one column narrower than the right.

    Raises:
        DecodeError: if the image is less than 2 pixels wide.
    """
    width, height = img.size
    if width < 2:
        raise DecodeError(f"Image too narrow to split: {width}px wide")
    half_width = width // 2
    left = img.crop((0, 0, half_width, height))
    right = img.crop((half_width, 0, width, height))
    return left, right


def encode_with_dpi(img: Image.Image, quality: int = SPLIT_QUALITY, dpi: int = TARGET_DPI) -> bytes:
    """JPEG-encode `img` and stamp `dpi` into its JFIF header."""
    try:
        data = encode_jpeg(img, quality)
    except DECODE_ERRORS as err:
        raise DecodeError(f"Cannot encode image: {err}") from err
    return bytes(set_jpeg_dpi(bytearray(data), dpi))


def save_with_dpi(img: Image.Image, path: Path, quality: int = SPLIT_QUALITY) -> None:
    data = encode_with_dpi(img, quality)
    try:
        path.write_bytes(data)
    except OSError as err:
        raise IoError(f"Cannot write '{path}': {err}") from err


def split_image(source_path: Union[str, Path], folder: Path, sequence_number: int) -> Tuple[Path, Path]:
    """
    Split the image at `source_path` into `<folder>/<NN>_1.jpg` and `<folder>/<NN>_2.jpg`.

    Args:
        source_path: Source JPEG file.
        folder: Existing output directory.
        sequence_number: 1-based position of the image in the export order.

    Returns:
        The (left, right) output paths.

    Raises:
        DecodeError: if the source cannot be decoded or a half cannot be encoded.
        InvalidContainerError: if the encoder produced something that is not a JPEG.
        IoError: if an output file cannot be written.
    """
    left_path, right_path = output_paths(Path(folder), sequence_number)
    with decode_image(source_path) as img:
        left, right = split_halves(img)
        logger.debug("Splitting '%s' (%dx%d) into %s / %s",
                     source_path, img.width, img.height, left_path.name, right_path.name)
        save_with_dpi(left, left_path)
        save_with_dpi(right, right_path)
    return left_path, right_path
