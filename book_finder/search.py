"""Search request lifecycle: idle, searching, results or failed."""
import logging
from enum import Enum
from typing import List, Optional, Union

from book_finder.errors import CatalogError
from book_finder.models import CatalogItem, SearchField
from book_finder.notifier import DESTRUCTIVE, LoggingNotifier, Notification, Notifier

logger = logging.getLogger(__name__)


class SearchState(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    RESULTS = "results"
    FAILED = "failed"


class SearchOrchestrator:
    """
    Owns the query lifecycle on top of an async catalog client.

    Every submission replaces the result list in full. The list is cleared
    as soon as a new search starts, so stale results are never shown while
    the request is in flight. Only the response to the most recent
    submission is applied.
    """

    def __init__(self, client, notifier: Optional[Notifier] = None):
        """
        Args:
            client: Object with ``async search(query, field)``
            notifier: Receives the completion/failure notifications
        """
        self.client = client
        self.notifier = notifier or LoggingNotifier()

        self.state = SearchState.IDLE
        self.items: List[CatalogItem] = []
        self.query = ""
        self.field = SearchField.TITLE
        self.error: Optional[CatalogError] = None
        self._generation = 0

    @property
    def has_searched(self) -> bool:
        return self.state is not SearchState.IDLE

    @property
    def is_loading(self) -> bool:
        return self.state is SearchState.SEARCHING

    @property
    def heading(self) -> str:
        if not self.has_searched:
            return "Search Books"
        return f'Search Results for "{self.query}"' if self.query else "Search Results"

    async def submit(
        self,
        query: str,
        field: Union[SearchField, str] = SearchField.TITLE
    ) -> SearchState:
        """
        Run a search and apply its outcome.

        A blank query is ignored: no request is made and the state does not
        change.

        Returns:
            The state after the submission settled
        """
        query = (query or "").strip()
        if not query:
            logger.debug("Ignoring blank search query")
            return self.state

        field = SearchField(field)

        self._generation += 1
        generation = self._generation

        self.state = SearchState.SEARCHING
        self.items = []
        self.query = query
        self.field = field
        self.error = None

        logger.info(f"Searching {field.value}={query!r}")

        try:
            items = await self.client.search(query, field)
        except CatalogError as e:
            if generation != self._generation:
                logger.debug(f"Discarding stale failure for {query!r}")
                return self.state
            logger.error(f"Search failed for {query!r}: {e}")
            self.state = SearchState.FAILED
            self.items = []
            self.error = e
            self.notifier.notify(Notification(
                title="Search failed",
                description="There was an error searching for books. Please try again.",
                variant=DESTRUCTIVE,
            ))
            return self.state

        if generation != self._generation:
            logger.debug(f"Discarding stale results for {query!r}")
            return self.state

        self.items = list(items)
        self.state = SearchState.RESULTS

        if self.items:
            self.notifier.notify(Notification(
                title="Search completed",
                description=f'Found {len(self.items)} books for "{query}"',
            ))
        else:
            self.notifier.notify(Notification(
                title="No books found",
                description=f'No results found for "{query}". Try a different search term.',
                variant=DESTRUCTIVE,
            ))

        return self.state

    def reset(self) -> None:
        """Return to the start: no query, no results, no error."""
        self._generation += 1
        self.state = SearchState.IDLE
        self.items = []
        self.query = ""
        self.field = SearchField.TITLE
        self.error = None
