"""
dc-download - Download images from the NYPL Digital Collections.

This package queries the Digital Collections API for the captures of a single
item and downloads one image per capture in the requested size and format.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from dc_download.config import Config
from dc_download.pipeline import download_item

__all__ = ["Config", "download_item", "__version__"]
