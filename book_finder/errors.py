"""Errors raised by the catalog clients."""
from typing import Optional


class CatalogError(RuntimeError):
    """Base class for catalog failures."""


class TransportError(CatalogError):
    """The request could not complete (connection failure, timeout)."""


class ServiceError(CatalogError):
    """The catalog service answered with a non-success status or bad body."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class EnrichmentUnavailable(CatalogError):
    """Detail data could not be fetched. Never escalated past the client."""
