"""Data models for catalog items."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from book_finder.config import Config
from book_finder.covers import MEDIUM, cover_url


class SearchField(str, Enum):
    """Catalog field a query is matched against."""
    TITLE = "title"
    AUTHOR = "author"
    SUBJECT = "subject"


@dataclass
class CatalogItem:
    """Search result as returned by the catalog service."""
    key: str
    title: str
    author_names: List[str] = field(default_factory=list)
    first_publish_year: Optional[int] = None
    cover_id: Optional[int] = None
    subjects: List[str] = field(default_factory=list)
    isbns: List[str] = field(default_factory=list)
    publishers: List[str] = field(default_factory=list)
    publish_dates: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    number_of_pages_median: Optional[int] = None

    def authors_str(self, limit: int = 2) -> str:
        """Format the first ``limit`` authors as comma-separated string."""
        return ", ".join(self.author_names[:limit]) or "Unknown Author"

    def publishers_str(self, limit: int = 3) -> str:
        return ", ".join(self.publishers[:limit]) or "Unknown Publisher"

    def languages_str(self, limit: int = 3) -> str:
        return ", ".join(self.languages[:limit]) or "Unknown"

    def cover_url(self, size: str = MEDIUM) -> str:
        return cover_url(self.cover_id, size)

    @property
    def open_library_url(self) -> str:
        """Link to the item's page on the catalog website."""
        return f"{Config.OPENLIBRARY_BASE_URL}{self.key}"


@dataclass
class CatalogItemDetail:
    """Normalized supplementary data for a single item."""
    description: Optional[str] = None
    first_sentence: Optional[str] = None
    excerpt: Optional[str] = None
    subjects: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.description or self.first_sentence or self.excerpt or self.subjects)
