"""
Fixed pipeline constants for image-rename-split.

None of these are exposed to callers of the pipeline; the output format
(quality, density, naming) is part of the tool's contract.
"""

THUMBNAIL_SIZE = 200
THUMBNAIL_QUALITY = 85
THUMBNAIL_DATA_URI_PREFIX = "data:image/jpeg;base64,"

SPLIT_QUALITY = 100
TARGET_DPI = 300

CHUNK_SIZE = 3
OUTPUT_SUBDIR = "SPL"
SEQUENCE_WIDTH = 2

JPEG_EXTS = {'.jpg', '.jpeg'}

# How long non-processing notifications stay visible in the UI
NOTIFICATION_SECONDS = 3
