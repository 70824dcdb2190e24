"""Errors raised while turning query parameters into store calls.

Both kinds are caught by the request handlers and reported as structured
failure results, never as unhandled exceptions.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for catalog errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(CatalogError):
    """Query parameters are unparseable or contradict each other.

    The message is safe to show to the caller, e.g.
    ``"startDate greater than endDate"``.
    """


class StoreError(CatalogError):
    """A data store call failed (connectivity, timeout, malformed query).

    The message is generic; the driver error is chained as ``__cause__``
    for logging only.
    """
