"""
Core functionality for thumbnailing, splitting and density patching.
"""

from .errors import ImageSplitError, DecodeError, InvalidContainerError, IoError, DialogCancelled
from .models import (
    ImageItem,
    ProcessingJob,
    ChunkAssignment,
    ItemOutcome,
    LoadResult,
    ExportResult,
    Notification,
    NotificationType,
)
from .image_encoder import encode_base64, create_thumbnail, thumbnail_data_uri
from .jfif import set_jpeg_dpi, read_jfif_density, build_jfif_segment
from .splitter import split_image, pad_number
from .workers import ChunkWorkerPool, partition_items, process_job, process_job_async
from .collection import ImageCollection, load_items

__all__ = [
    "ImageSplitError",
    "DecodeError",
    "InvalidContainerError",
    "IoError",
    "DialogCancelled",
    "ImageItem",
    "ProcessingJob",
    "ChunkAssignment",
    "ItemOutcome",
    "LoadResult",
    "ExportResult",
    "Notification",
    "NotificationType",
    "encode_base64",
    "create_thumbnail",
    "thumbnail_data_uri",
    "set_jpeg_dpi",
    "read_jfif_density",
    "build_jfif_segment",
    "split_image",
    "pad_number",
    "ChunkWorkerPool",
    "partition_items",
    "process_job",
    "process_job_async",
    "ImageCollection",
    "load_items",
]
