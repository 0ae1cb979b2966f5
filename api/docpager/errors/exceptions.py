"""Domain exceptions raised by the pager and the document store client."""

from typing import Any, Optional


class PagerError(Exception):
    """Base class for every error raised by docpager."""


class MalformedIdentifierError(PagerError, ValueError):
    """The supplied identifier or cursor token cannot be parsed."""

    def __init__(self, value: Any, reason: Optional[str] = None):
        self.value = value
        self.reason = reason
        message = f"Malformed identifier: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidLimitError(PagerError, ValueError):
    """The requested page size is not a positive integer within bounds."""

    def __init__(self, limit: Any, max_limit: Optional[int] = None):
        self.limit = limit
        self.max_limit = max_limit
        if max_limit is not None:
            message = f"Limit must be an integer between 1 and {max_limit}, got {limit!r}"
        else:
            message = f"Limit must be a positive integer, got {limit!r}"
        super().__init__(message)


class StoreConnectionError(PagerError, ConnectionError):
    """The document store could not be reached."""


class QueryError(PagerError):
    """The document store reported a failure while executing a query."""

    def __init__(self, message: str, collection: Optional[str] = None):
        self.collection = collection
        super().__init__(message)
