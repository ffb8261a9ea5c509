"""Detail view lifecycle for a single selected item."""
import logging
from enum import Enum
from typing import Optional

from book_finder.models import CatalogItem, CatalogItemDetail
from book_finder.parse import normalize_detail

logger = logging.getLogger(__name__)


class DetailState(str, Enum):
    CLOSED = "closed"
    LOADING = "loading"
    LOADED = "loaded"
    UNAVAILABLE = "unavailable"


class DetailOrchestrator:
    """
    Fetches and normalizes supplementary data when a detail view opens.

    Last selection wins: each fetch is tagged with the selection it was
    issued for, and a response arriving after the selection changed is
    dropped. Nothing is cached between selections.
    """

    def __init__(self, client):
        """
        Args:
            client: Object with ``async fetch_detail(key)`` returning a dict or None
        """
        self.client = client

        self.state = DetailState.CLOSED
        self.item: Optional[CatalogItem] = None
        self.detail: Optional[CatalogItemDetail] = None
        self._selection = None
        self._sequence = 0

    @property
    def is_open(self) -> bool:
        return self.state is not DetailState.CLOSED

    @property
    def is_loading(self) -> bool:
        return self.state is DetailState.LOADING

    async def open(self, item: CatalogItem) -> DetailState:
        """Select ``item`` and load its detail record."""
        self._sequence += 1
        selection = (item.key, self._sequence)
        self._selection = selection

        self.item = item
        self.detail = None
        self.state = DetailState.LOADING

        raw = await self.client.fetch_detail(item.key)

        if selection != self._selection:
            logger.debug(f"Discarding stale detail for {item.key}")
            return self.state

        if raw is None:
            logger.info(f"Detail unavailable for {item.key}, showing base fields")
            self.state = DetailState.UNAVAILABLE
            return self.state

        self.detail = normalize_detail(raw)
        self.state = DetailState.LOADED
        return self.state

    def close(self) -> None:
        """Close the view and forget the selection."""
        self._selection = None
        self.state = DetailState.CLOSED
        self.item = None
        self.detail = None
