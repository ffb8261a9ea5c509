"""Cover image URL derivation."""
from typing import Optional

from book_finder.config import Config

# Size codes accepted by the covers service
SMALL = "S"
MEDIUM = "M"
LARGE = "L"

COVER_SIZES = (SMALL, MEDIUM, LARGE)


def cover_url(cover_id: Optional[int], size: str = MEDIUM) -> str:
    """
    Build the cover image URL for a cover identifier.

    Args:
        cover_id: Numeric cover id from a search result (``cover_i``)
        size: One of ``S``, ``M`` (cards) or ``L`` (detail view)

    Returns:
        Image URL, or the local placeholder when there is no cover
    """
    if size not in COVER_SIZES:
        raise ValueError(f"Unknown cover size: {size!r}")

    if not cover_id:
        return Config.PLACEHOLDER_IMAGE

    return f"{Config.COVERS_BASE_URL}/b/id/{cover_id}-{size}.jpg"
