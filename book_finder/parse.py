"""Parse and normalize Open Library API responses."""
import logging
from typing import Dict, Any, List, Optional

from book_finder.models import CatalogItem, CatalogItemDetail

logger = logging.getLogger(__name__)


def _str_list(value: Any) -> List[str]:
    """Coerce a list field to a list of strings, tolerating a bare string."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _int_or_none(value: Any) -> Optional[int]:
    # bool is an int subclass
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _text_value(value: Any) -> Optional[str]:
    """
    Resolve a text field given either as a plain string or as a typed
    object such as ``{"type": "/type/text", "value": "..."}``.
    """
    if isinstance(value, dict):
        value = value.get("value")
    if isinstance(value, str) and value:
        return value
    return None


def parse_item(doc: Dict[str, Any]) -> Optional[CatalogItem]:
    """
    Parse a single document from an Open Library search response.

    Args:
        doc: Single entry of the ``docs`` array

    Returns:
        CatalogItem or None if the document has no key
    """
    try:
        key = doc.get("key")
        if not key or not isinstance(key, str):
            return None

        title = doc.get("title")
        if not isinstance(title, str) or not title:
            title = "Unknown Title"

        return CatalogItem(
            key=key,
            title=title,
            author_names=_str_list(doc.get("author_name")),
            first_publish_year=_int_or_none(doc.get("first_publish_year")),
            cover_id=_int_or_none(doc.get("cover_i")),
            subjects=_str_list(doc.get("subject")),
            isbns=_str_list(doc.get("isbn")),
            publishers=_str_list(doc.get("publisher")),
            publish_dates=_str_list(doc.get("publish_date")),
            languages=_str_list(doc.get("language")),
            number_of_pages_median=_int_or_none(doc.get("number_of_pages_median")),
        )
    except Exception as e:
        # Malformed documents are skipped
        logger.warning(f"Failed to parse search document: {e}")
        return None


def parse_search_response(response_json: Any) -> List[CatalogItem]:
    """
    Parse a full search response.

    Args:
        response_json: Complete API response JSON

    Returns:
        List of CatalogItem objects (empty if ``docs`` is missing)
    """
    if not isinstance(response_json, dict):
        return []

    docs = response_json.get("docs") or []
    items = []

    for doc in docs:
        if not isinstance(doc, dict):
            continue
        item = parse_item(doc)
        if item:
            items.append(item)

    return items


def normalize_detail(raw: Any) -> CatalogItemDetail:
    """
    Normalize a work's JSON record into a CatalogItemDetail.

    Never raises: missing or unexpectedly shaped fields come back as
    ``None`` (or an empty subject list).
    """
    if not isinstance(raw, dict):
        return CatalogItemDetail()

    excerpt = None
    excerpts = raw.get("excerpts")
    if isinstance(excerpts, list) and excerpts:
        first = excerpts[0]
        if isinstance(first, dict):
            excerpt = _text_value(first.get("excerpt"))

    return CatalogItemDetail(
        description=_text_value(raw.get("description")),
        first_sentence=_text_value(raw.get("first_sentence")),
        excerpt=excerpt,
        subjects=_str_list(raw.get("subjects")),
    )
