"""
Image Rename Split

Split a batch of JPEG photos into numbered left/right halves stamped with a 300 dpi print resolution.
"""

__version__ = "0.1.0"

from .core import (
    ImageCollection,
    ImageItem,
    ProcessingJob,
    ExportResult,
    LoadResult,
    ChunkWorkerPool,
    process_job,
    process_job_async,
    set_jpeg_dpi,
    read_jfif_density,
    split_image,
    thumbnail_data_uri,
    encode_base64,
)
from .core.errors import ImageSplitError, DecodeError, InvalidContainerError, IoError, DialogCancelled


def main():
    """Entry point for the image-rename-split command."""
    from .cli import main as cli_main
    return cli_main()


__all__ = [
    "ImageCollection",
    "ImageItem",
    "ProcessingJob",
    "ExportResult",
    "LoadResult",
    "ChunkWorkerPool",
    "process_job",
    "process_job_async",
    "set_jpeg_dpi",
    "read_jfif_density",
    "split_image",
    "thumbnail_data_uri",
    "encode_base64",
    "ImageSplitError",
    "DecodeError",
    "InvalidContainerError",
    "IoError",
    "DialogCancelled",
]
