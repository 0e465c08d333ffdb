"""Exception hierarchy shared by the fetcher, the extractor and the search client."""

from __future__ import annotations


class MetascoreError(Exception):
    """Base class for every error raised by metascore."""


class ConfigurationError(MetascoreError, ValueError):
    """Raised for invalid settings, e.g. a concurrency limit below one."""


class UnknownPlatformError(MetascoreError, ValueError):
    """Raised when a platform name is not in the identifier table."""

    def __init__(self, platform: str) -> None:
        super().__init__(f"unknown platform {platform!r}")
        self.platform = platform


class FetchError(MetascoreError):
    """A single target could not be retrieved.

    Transports raise this; the fetcher turns it into a failure outcome so one
    bad URL never aborts a batch.
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class SearchError(MetascoreError):
    """The search result page could not be fetched or parsed."""
