"""Exception and warning types raised by the client."""

from __future__ import annotations


class ClimateError(Exception):
    """Base class for all client errors."""


class InvalidArgument(ClimateError, ValueError):
    """Caller passed a bad interval, period, coordinate pair or date range."""


class NotFound(ClimateError, LookupError):
    """A station or climate identifier could not be resolved."""


class TransportError(ClimateError):
    """A page request failed: non-200 status, network error or bad JSON."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        collection: str | None = None,
        offset: int | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.collection = collection
        self.offset = offset


class DownloadCancelled(ClimateError):
    """The caller's cancel event was set before a request was issued."""


class CacheWarning(UserWarning):
    pass


class CacheWriteWarning(CacheWarning):
    """The station table could not be written to the cache file."""


class CacheDirWarning(CacheWarning):
    """The cache directory could not be created."""
