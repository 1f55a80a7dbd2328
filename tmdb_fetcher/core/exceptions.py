"""
Failure Types
Every failure the fetch pipeline can produce, from a single request up to the whole run
"""
from typing import Optional


class TMDBFetcherError(RuntimeError):
    """Base class for all fetcher failures."""


class TransportFailure(TMDBFetcherError):
    """A GET against the catalog API did not produce a 2xx body."""


class NetworkFailure(TransportFailure):
    """DNS, connection or timeout error before any response arrived."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Network error fetching from TMDB: {message}")


class HttpFailure(TransportFailure):
    """A response arrived with a non-2xx status."""

    def __init__(self, status: int, message: str = "Unknown error"):
        self.status = status
        self.message = message
        super().__init__(f"HTTP error {status}: {message}")


class DecodeFailure(TMDBFetcherError):
    """The response body did not match the expected shape."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class EnrichmentFailure(TMDBFetcherError):
    """Credits could not be fetched or decoded for one item."""

    def __init__(self, item_id: int, cause: Exception):
        self.item_id = item_id
        self.cause = cause
        super().__init__(f"Error fetching credits for {item_id}: {cause}")


class CategoryFailure(TMDBFetcherError):
    """The listing for one category could not be fetched or decoded."""

    def __init__(self, category_name: str, message: str, cause: Optional[Exception] = None):
        self.category_name = category_name
        self.cause = cause
        super().__init__(message)


class FatalFailure(TMDBFetcherError):
    """The run cannot produce any output."""
