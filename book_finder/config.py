"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Open Library
    OPENLIBRARY_BASE_URL = os.getenv("OPENLIBRARY_BASE_URL", "https://openlibrary.org")
    COVERS_BASE_URL = os.getenv("COVERS_BASE_URL", "https://covers.openlibrary.org")
    PLACEHOLDER_IMAGE = os.getenv("PLACEHOLDER_IMAGE", "/placeholder.svg")

    # Fixed page size, not configurable
    SEARCH_LIMIT = 24

    # Defaults
    DEFAULT_TIMEOUT = int(os.getenv("DEFAULT_TIMEOUT", "10"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
