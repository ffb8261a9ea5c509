"""Open Library endpoint addressing shared by both clients."""
from typing import Dict, Optional, Union

from book_finder.config import Config
from book_finder.models import SearchField


def search_url(base_url: Optional[str] = None) -> str:
    return f"{(base_url or Config.OPENLIBRARY_BASE_URL).rstrip('/')}/search.json"


def search_params(query: str, field: Union[SearchField, str] = SearchField.TITLE) -> Dict[str, Union[str, int]]:
    """
    Build query parameters for a search.

    Raises:
        ValueError: if the query is blank or the field is unknown
    """
    query = (query or "").strip()
    if not query:
        raise ValueError("Search query must not be empty")

    field = SearchField(field)
    return {field.value: query, "limit": Config.SEARCH_LIMIT}


def detail_url(key: str, base_url: Optional[str] = None) -> str:
    """
    URL of the JSON record for an item key.

    ``/works/OL27448W`` and bare work ids such as ``OL27448W`` are both
    accepted.
    """
    key = (key or "").strip()
    if not key:
        raise ValueError("Item key must not be empty")

    if "/" not in key:
        key = f"/works/{key}"
    elif not key.startswith("/"):
        key = f"/{key}"

    return f"{(base_url or Config.OPENLIBRARY_BASE_URL).rstrip('/')}{key}.json"
