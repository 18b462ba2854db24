"""
utils/exceptions.py
-------------------
Error types raised by the data access layer.

Repositories surface these to their callers as-is; nothing below the
caller retries or recovers from them.
"""

from typing import Optional


class RepositoryError(Exception):
    """Base class for every failure raised while loading entities."""


class DataAccessError(RepositoryError):
    """
    The row stream failed while it was being read.

    The underlying driver error is chained as ``__cause__``.

    Attributes:
        operation: Name of the lookup that was running (e.g. 'find_all').
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class AmbiguousResultError(RepositoryError):
    """
    A point lookup reconstructed more than one parent entity.

    Attributes:
        count: Number of distinct parents found.
        context: Description of the lookup that was performed.
    """

    def __init__(self, count: int, context: str = "single result lookup"):
        super().__init__(
            f"Expected at most one result for {context} but found {count}"
        )
        self.count = count
        self.context = context
