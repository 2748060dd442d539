"""Exceptions raised while loading the lookup table."""
from typing import Optional


class SourceError(Exception):
    """Base class for failures that end a refresh cycle."""

    def __init__(self, reason: str, status: Optional[int] = None):
        self.reason = reason
        self.status = status
        super().__init__(f"{status} {reason}" if status is not None else reason)


class FetchError(SourceError):
    """The source could not be read (network error, bad status, timeout)."""


class ParseError(SourceError):
    """The source was read but could not be turned into records."""


class InitialLoadError(SourceError):
    """The first load failed, so there is no snapshot to fall back on."""
