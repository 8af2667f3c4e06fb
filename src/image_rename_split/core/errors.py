"""
Error taxonomy for the split pipeline.
"""


class ImageSplitError(Exception):
    """Base class for all pipeline errors."""


class DecodeError(ImageSplitError):
    """A source image is missing, unreadable or not a supported raster format."""


class InvalidContainerError(ImageSplitError):
    """An encoded buffer does not start with a JPEG Start-Of-Image marker."""


class IoError(ImageSplitError):
    """Writing an output file or creating the output directory failed."""


class DialogCancelled(ImageSplitError):
    """The user aborted a file or folder selection. Not a failure."""
