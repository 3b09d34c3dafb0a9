"""HTTP client for the remote anime catalog."""

import logging
from typing import Optional

import httpx

from anime_catalog.core import CatalogItem, RemoteCatalogClient, parse_catalog_response

logger = logging.getLogger(__name__)


class HttpCatalogClient(RemoteCatalogClient):
    """Fetch the catalog list over HTTP."""

    def __init__(
        self,
        base_url: str,
        catalog_path: str = "/anime",
        timeout: float = 30.0,
        api_token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize catalog client.

        Args:
            base_url: Catalog service root URL
            catalog_path: Path of the list endpoint
            timeout: Request timeout in seconds
            api_token: Optional bearer token
            client: Shared AsyncClient. If None, one is opened per request.
        """
        self.base_url = base_url.rstrip("/")
        self.catalog_path = catalog_path
        self.timeout = timeout
        self.api_token = api_token
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.catalog_path.lstrip('/')}"

    async def fetch(self) -> Optional[list[CatalogItem]]:
        """Issue one GET for the catalog list.

        Raises:
            httpx.HTTPStatusError: Non-2xx response
            httpx.TransportError: No response received
        """
        if self._client is not None:
            return await self._fetch(self._client)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._fetch(client)

    async def _fetch(self, client: httpx.AsyncClient) -> Optional[list[CatalogItem]]:
        response = await client.get(self.url, headers=self._get_headers())
        response.raise_for_status()

        items = parse_catalog_response(response.json())
        logger.debug(
            "GET %s -> %s (%s items)",
            self.url,
            response.status_code,
            "no" if items is None else len(items),
        )
        return items

    def _get_headers(self) -> dict[str, str]:
        """Get headers for catalog requests."""
        headers = {"Accept": "application/json"}

        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        return headers
