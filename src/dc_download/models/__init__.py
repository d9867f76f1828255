"""Data models for dc_download."""

from dc_download.models.capture import Capture
from dc_download.models.options import (
    FILENAME_FIELDS,
    SIZES,
    FilenameField,
    ImageSize,
)

__all__ = [
    "Capture",
    "FilenameField",
    "ImageSize",
    "FILENAME_FIELDS",
    "SIZES",
]
