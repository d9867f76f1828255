"""HTTP client utilities using httpx directly (async-only).

This module provides helper functions for creating async httpx clients with
proper configuration from Config objects, and for streaming a single file to
disk.

Retry logic is handled by tenacity decorators for explicit and configurable
retry behavior.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from dc_download.config import Config

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def create_client(config: Config) -> httpx.AsyncClient:
    """Create an async httpx client from configuration.

    Args:
        config: Configuration object

    Returns:
        Configured httpx.AsyncClient instance

    Example:
        >>> config = Config(token="...")
        >>> async with create_client(config) as client:
        ...     response = await client.get(url)
    """
    return httpx.AsyncClient(
        headers={'User-Agent': config.user_agent},
        timeout=config.timeout,
        follow_redirects=True,
        http2=True,
        proxy=config.proxy,
    )


def is_retryable(exc: BaseException) -> bool:
    """Decide whether a failed request is worth another attempt.

    Transport problems, rate limiting and server errors are retried;
    any other HTTP status (404, 401, ...) fails immediately.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return isinstance(exc, httpx.TransportError)


def create_retry_decorator(config: Config):
    """Create a tenacity retry decorator from config.

    Args:
        config: Configuration object

    Returns:
        Configured retry decorator
    """
    return retry(
        stop=stop_after_attempt(max(config.max_retries, 1)),
        wait=wait_exponential(
            multiplier=config.retry_multiplier,
            min=config.retry_wait_min,
            max=config.retry_wait_max,
        ),
        retry=retry_if_exception(is_retryable),
        reraise=True,
    )


async def download_file(
    client: httpx.AsyncClient,
    url: str,
    dest_path: Path,
    config: Config,
    headers: Optional[Dict[str, str]] = None,
) -> bool:
    """Stream a file to disk with tenacity retry logic.

    The body is written to a ``.part`` file next to the destination and
    renamed once complete, so ``dest_path`` only ever exists fully written.
    Existing files are skipped unless ``config.overwrite`` is set.

    Args:
        client: httpx.AsyncClient instance
        url: URL to download from
        dest_path: Destination file path
        config: Config object for retry and overwrite settings
        headers: Optional additional headers

    Returns:
        True if the file was written, False if it already existed

    Raises:
        httpx.HTTPError: If download fails after all retries
    """
    # Skip if file already exists (file-level resumability)
    if dest_path.exists() and not config.overwrite:
        logger.info(f"Skipping existing file: {dest_path}")
        return False

    dest_path.parent.mkdir(parents=True, exist_ok=True)
    part_path = dest_path.with_name(dest_path.name + '.part')

    @create_retry_decorator(config)
    async def _download_with_retry():
        async with client.stream('GET', url, headers=headers) as response:
            response.raise_for_status()
            with open(part_path, 'wb') as f:
                async for chunk in response.aiter_bytes(CHUNK_SIZE):
                    f.write(chunk)

    try:
        await _download_with_retry()
    except BaseException:
        part_path.unlink(missing_ok=True)
        raise

    part_path.replace(dest_path)
    return True
