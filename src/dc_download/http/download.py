"""Sequential download manager (async-only).

Files are downloaded strictly one at a time, in the order they are handed
in. File-level resumability: files are skipped if they already exist.
A failed download is not recovered from; the error propagates to the caller.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
from tqdm import tqdm

from dc_download.config import Config
from dc_download.http.client import create_client, download_file

logger = logging.getLogger(__name__)


@dataclass
class DownloadTask:
    """A single download task with URL and destination."""

    url: str
    save_path: Path
    capture_uuid: str = ""

    def __post_init__(self):
        """Ensure save_path is a Path object."""
        if isinstance(self.save_path, str):
            self.save_path = Path(self.save_path)


class DownloadManager:
    """Runs download tasks one after another with progress tracking.

    Use as an async context manager so the HTTP client and the progress bar
    are closed however the run ends::

        async with DownloadManager(config) as dm:
            await dm.download(task)
    """

    def __init__(
        self,
        config: Config,
        client: Optional[httpx.AsyncClient] = None,
        total: Optional[int] = None,
    ):
        """Initialize download manager.

        Args:
            config: Configuration object
            client: Existing client to reuse (not closed by the manager)
            total: Expected number of files, if known, for the progress bar
        """
        self.config = config
        self._client = client
        self._owns_client = client is None
        self.total = total
        self.downloaded = 0
        self.skipped = 0
        self.pbar: Optional[tqdm] = None

    async def __aenter__(self) -> "DownloadManager":
        if self._client is None:
            self._client = create_client(self.config)
        if self.config.show_progress:
            self.pbar = tqdm(total=self.total, desc="Downloading", unit="file")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.pbar:
            self.pbar.close()
            self.pbar = None
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def set_total(self, total: int) -> None:
        """Set the expected number of files once the catalog reports it."""
        self.total = total
        if self.pbar:
            self.pbar.total = total
            self.pbar.refresh()

    async def download(self, task: DownloadTask) -> bool:
        """Download a single task, blocking until it is on disk.

        Returns:
            True if the file was written, False if it was skipped

        Raises:
            httpx.HTTPError: If the download fails after retries
        """
        if self._client is None:
            raise RuntimeError("DownloadManager must be used as an async context manager")

        written = await download_file(
            client=self._client,
            url=task.url,
            dest_path=task.save_path,
            config=self.config,
        )

        if written:
            self.downloaded += 1
            logger.debug(f"Downloaded: {task.url} -> {task.save_path}")
        else:
            self.skipped += 1

        if self.pbar:
            self.pbar.update(1)
            self.pbar.set_postfix({"downloaded": self.downloaded, "skipped": self.skipped})

        return written
