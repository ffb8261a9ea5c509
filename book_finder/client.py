"""Blocking HTTP client for the Open Library catalog."""
import requests
from typing import List, Optional, Dict, Any, Union
import logging

from book_finder.config import Config
from book_finder.endpoints import detail_url, search_params, search_url
from book_finder.errors import EnrichmentUnavailable, ServiceError, TransportError
from book_finder.models import CatalogItem, SearchField
from book_finder.parse import parse_search_response

logger = logging.getLogger(__name__)


class OpenLibraryClient:
    """Client for Open Library search and work records, one attempt per call."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = Config.DEFAULT_TIMEOUT
    ):
        """
        Initialize Open Library client.

        Args:
            base_url: Catalog base URL (defaults to Config.OPENLIBRARY_BASE_URL)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url or Config.OPENLIBRARY_BASE_URL
        self.timeout = timeout

        # Create session for connection pooling
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def search(
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
            logger.info(f"Search request: {url} {params}")
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(f"Timeout searching for {params}")
            raise TransportError(f"Search timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.warning(f"Connection error searching for {params}: {e}")
            raise TransportError(f"Search request failed: {e}") from e

        if not response.ok:
            logger.error(f"Search error ({response.status_code}): {response.url}")
            raise ServiceError(
                f"Catalog returned status {response.status_code}",
                status_code=response.status_code,
                url=response.url,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ServiceError(
                "Catalog returned a body that is not JSON",
                status_code=response.status_code,
                url=response.url,
            ) from e

        items = parse_search_response(payload)
        logger.info(f"Success: {len(items)} items")
        return items

    def fetch_detail(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the raw JSON record for an item.

        Returns:
            Parsed JSON object, or None if enrichment is unavailable
        """
        try:
            return self._get_detail(key)
        except EnrichmentUnavailable as e:
            logger.warning(f"Detail unavailable for {key}: {e}")
            return None

    def _get_detail(self, key: str) -> Dict[str, Any]:
        url = detail_url(key, self.base_url)

        try:
            logger.info(f"Detail request: {url}")
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise EnrichmentUnavailable(f"request failed: {e}") from e

        if not response.ok:
            raise EnrichmentUnavailable(f"status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise EnrichmentUnavailable("body is not JSON") from e

        if not isinstance(payload, dict):
            raise EnrichmentUnavailable("body is not a JSON object")

        return payload

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
