"""Capture download pipeline.

Fetch the capture listing of an item, derive an image URL and a destination
path for each capture, and download the files one at a time.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from dc_download.api import DigitalCollectionsClient
from dc_download.config import Config
from dc_download.exceptions import CaptureError
from dc_download.http.client import create_client
from dc_download.http.download import DownloadManager, DownloadTask
from dc_download.models.capture import Capture
from dc_download.models.options import (
    TIFF_CODE,
    FilenameField,
    ImageSize,
    get_filename_field,
    get_size,
)
from dc_download.utils.file import ensure_dir, sanitize_filename

logger = logging.getLogger(__name__)

IMAGE_SERVER_URL = "http://images.nypl.org/index.php"


@dataclass
class DownloadResult:
    """Summary of a finished run."""

    uuid: str
    downloaded: int
    skipped: int
    save_path: Path

    @property
    def total(self) -> int:
        return self.downloaded + self.skipped


def image_url(image_id: str, size_code: str) -> str:
    """URL of an image on the NYPL image server."""
    return f"{IMAGE_SERVER_URL}?id={image_id}&t={size_code}"


def resolve_image_url(capture: Capture, size: ImageSize) -> str:
    """Pick the URL serving ``capture`` in the requested size.

    Raises:
        CaptureError: If the capture does not offer that size
    """
    if size.code == TIFF_CODE:
        if not capture.high_res_link:
            raise CaptureError(f"TIFF not available for this capture: {capture.uuid}")
        return capture.high_res_link

    if not capture.has_size(size.code):
        raise CaptureError(
            f"Image size '{size.code}' not available for this capture: {capture.uuid}"
        )
    return image_url(capture.image_id, size.code)


def build_task(
    capture: Capture,
    size: ImageSize,
    filename_field: FilenameField,
    output_dir: Path,
) -> DownloadTask:
    """Derive the URL and destination file for one capture."""
    url = resolve_image_url(capture, size)
    stem = sanitize_filename(capture.filename_value(filename_field.name))
    return DownloadTask(
        url=url,
        save_path=Path(output_dir) / f"{stem}.{size.extension}",
        capture_uuid=capture.uuid,
    )


async def download_item(config: Config, uuid: str) -> DownloadResult:
    """Download every capture of an item.

    Captures are processed in API order. The first capture that cannot be
    served in the requested size, or the first failed download, aborts the
    run; files written before that point are kept.

    Args:
        config: Validated configuration
        uuid: Identifier of the catalog item

    Returns:
        DownloadResult with counts and the output directory

    Raises:
        ConfigurationError: If the configuration is invalid
        CatalogError: If the API query fails
        CaptureError: If a capture lacks the requested image
        httpx.HTTPError: If an image download fails after retries
    """
    config.check()

    size = get_size(config.size)
    filename_field = get_filename_field(config.filename)
    output_dir = ensure_dir(config.output_path)

    logger.info(f"Downloading item {uuid} (size '{size.code}', filenames by {filename_field.name})")

    async with create_client(config) as client:
        catalog = DigitalCollectionsClient(config, client)

        async with DownloadManager(config, client=client) as dm:
            count = 0
            async for capture in catalog.iter_captures(uuid):
                if dm.total is None and catalog.num_results:
                    dm.set_total(catalog.num_results)
                task = build_task(capture, size, filename_field, output_dir)
                count += 1
                logger.info(f"Downloading image {count}")
                await dm.download(task)

    if count == 0:
        logger.warning(f"No captures found for item {uuid}")

    return DownloadResult(
        uuid=uuid,
        downloaded=dm.downloaded,
        skipped=dm.skipped,
        save_path=output_dir,
    )

