"""
Utility functions and helpers.
"""

from .log_utils import configure_logging, get_logger
from .utils import expand_inputs, is_jpeg_path, iter_jpeg_files

__all__ = ["configure_logging", "get_logger", "expand_inputs", "is_jpeg_path", "iter_jpeg_files"]
