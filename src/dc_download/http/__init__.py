"""HTTP client infrastructure for dc_download (async-only).

Uses httpx directly for both the catalog API and image downloads.
"""

from dc_download.http.client import (
    create_client,  # Returns AsyncClient
    download_file,  # Async function
)
from dc_download.http.download import DownloadManager, DownloadTask

__all__ = [
    "create_client",
    "download_file",
    "DownloadManager",
    "DownloadTask",
]
