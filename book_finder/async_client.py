"""Async HTTP client for the Open Library catalog."""
import httpx
from typing import List, Optional, Dict, Any, Union
import logging

from book_finder.config import Config
from book_finder.endpoints import detail_url, search_params, search_url
from book_finder.errors import EnrichmentUnavailable, ServiceError, TransportError
from book_finder.models import CatalogItem, SearchField
from book_finder.parse import parse_search_response

logger = logging.getLogger(__name__)


class AsyncOpenLibraryClient:
    """Async client for catalog searches and detail lookups."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = Config.DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize async client.

        Args:
            base_url: Catalog base URL (defaults to Config.OPENLIBRARY_BASE_URL)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url or Config.OPENLIBRARY_BASE_URL
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def search(
        self,
        query: str,
        field: Union[SearchField, str] = SearchField.TITLE
    ) -> List[CatalogItem]:
        """
        Search the catalog.

        Args:
            query: Non-blank search text
            field: title, author or subject

        Returns:
            Up to 24 catalog items, possibly none

        Raises:
            TransportError: the request could not complete
            ServiceError: non-success status or a body that is not JSON
        """
        url = search_url(self.base_url)
        params = search_params(query, field)

        try:
            logger.info(f"Async search: {params}")
            response = await self.client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error(f"Search request failed: {e}")
            raise TransportError(f"Search request failed: {e}") from e

        if not response.is_success:
            logger.warning(f"Status {response.status_code} for search: {params}")
            raise ServiceError(
                f"Catalog returned status {response.status_code}",
                status_code=response.status_code,
                url=str(response.url),
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ServiceError(
                "Catalog returned a body that is not JSON",
                status_code=response.status_code,
                url=str(response.url),
            ) from e

        items = parse_search_response(payload)
        logger.info(f"Search returned {len(items)} items")
        return items

    async def fetch_detail(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the raw JSON record for an item.

        Enrichment is best-effort: failures are logged and ``None`` is
        returned instead of raising.
        """
        try:
            return await self._get_detail(key)
        except EnrichmentUnavailable as e:
            logger.warning(f"Detail unavailable for {key}: {e}")
            return None

    async def _get_detail(self, key: str) -> Dict[str, Any]:
        url = detail_url(key, self.base_url)

        try:
            logger.info(f"Async detail request: {url}")
            response = await self.client.get(url)
        except httpx.RequestError as e:
            raise EnrichmentUnavailable(f"request failed: {e}") from e

        if not response.is_success:
            raise EnrichmentUnavailable(f"status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise EnrichmentUnavailable("body is not JSON") from e

        if not isinstance(payload, dict):
            raise EnrichmentUnavailable("body is not a JSON object")

        return payload

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
