"""Client for the NYPL Digital Collections API.

Only the capture listing of a single item is needed. The endpoint is
paginated; ``iter_captures`` walks all pages and yields captures as they
arrive so downloads can start before the listing is complete.

Responses are wrapped in an ``nyplAPI`` envelope::

    {
      "nyplAPI": {
        "request": {"page": "1", "perPage": "500", "totalPages": "3", ...},
        "response": {
          "headers": {"status": "success", "code": "200", "message": "ok"},
          "numResults": "1234",
          "capture": [{...}, ...]
        }
      }
    }
"""

import logging
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from dc_download.config import Config
from dc_download.exceptions import AuthenticationError, CatalogError
from dc_download.http.client import create_retry_decorator
from dc_download.models.capture import Capture, as_list

logger = logging.getLogger(__name__)


def auth_header(token: str) -> Dict[str, str]:
    return {'Authorization': f'Token token="{token}"'}


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class DigitalCollectionsClient:
    """Thin async wrapper around the Digital Collections items endpoint.

    Attributes:
        config: Configuration object (token, api_url, per_page, retries)
        client: httpx.AsyncClient used for requests
        num_results: Number of captures reported by the API, once known
    """

    def __init__(self, config: Config, client: httpx.AsyncClient):
        self.config = config
        self.client = client
        self.num_results: Optional[int] = None

    def items_url(self, uuid: str) -> str:
        return f"{self.config.api_url.rstrip('/')}/items/{uuid}"

    async def fetch_page(self, uuid: str, page: int) -> Dict[str, Any]:
        """Fetch one page of the capture listing and return the ``nyplAPI`` body.

        Raises:
            AuthenticationError: If the token is rejected
            CatalogError: If the API reports any other error
        """
        params = {
            'withTitles': 'yes',
            'per_page': self.config.per_page,
            'page': page,
        }

        @create_retry_decorator(self.config)
        async def _get():
            response = await self.client.get(
                self.items_url(uuid),
                params=params,
                headers=auth_header(self.config.token),
            )
            if response.status_code >= 500 or response.status_code == 429:
                response.raise_for_status()
            return response

        try:
            response = await _get()
        except httpx.HTTPStatusError as e:
            raise CatalogError(
                f"Digital Collections API returned HTTP {e.response.status_code} for item {uuid}"
            ) from e

        if response.status_code == 401:
            raise AuthenticationError("Digital Collections API rejected the access token")
        if response.is_error:
            raise CatalogError(
                f"Digital Collections API returned HTTP {response.status_code} for item {uuid}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise CatalogError(f"Invalid JSON from Digital Collections API: {e}") from e

        api = body.get('nyplAPI') if isinstance(body, dict) else None
        if not isinstance(api, dict):
            raise CatalogError("Unexpected response from Digital Collections API")

        headers = (api.get('response') or {}).get('headers') or {}
        code = str(headers.get('code', '200'))
        if code == '401':
            raise AuthenticationError("Digital Collections API rejected the access token")
        if code != '200':
            message = headers.get('message') or headers.get('status') or 'unknown error'
            raise CatalogError(f"Digital Collections API error {code}: {message}")

        return api

    async def iter_captures(self, uuid: str) -> AsyncIterator[Capture]:
        """Yield every capture of an item, in API order, across all pages."""
        page = 1
        total_pages: Optional[int] = None

        while True:
            api = await self.fetch_page(uuid, page)

            if total_pages is None:
                total_pages = _to_int((api.get('request') or {}).get('totalPages'), 1)
                self.num_results = _to_int((api.get('response') or {}).get('numResults')) or None
                logger.info(f"Item {uuid}: {self.num_results} captures in {total_pages} page(s)")

            records = as_list((api.get('response') or {}).get('capture'))
            for record in records:
                yield Capture.from_dict(record)

            if page >= total_pages:
                break
            page += 1
