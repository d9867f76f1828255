"""Utility functions for dc_download."""

from dc_download.utils.file import ensure_dir, sanitize_filename

__all__ = [
    "ensure_dir",
    "sanitize_filename",
]
