"""
Domain errors raised by quote/history retrieval.
Every retrieval failure is a RetrievalError so callers can catch one type and
display its message.
"""

from typing import Optional

AGGREGATE_MESSAGE_LIMIT = 180


class RetrievalError(Exception):
    """A quote or history fetch failed; str(exc) is fit for display."""


class TransportError(RetrievalError):
    """The provider answered with a non-success HTTP status, or not at all."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResultError(RetrievalError):
    """A well-formed response carried no usable data."""


class AggregateRetrievalError(RetrievalError):
    """Every request of a concurrent fan-out failed.

    The message is the prefix followed by the '; '-joined underlying messages,
    capped at AGGREGATE_MESSAGE_LIMIT characters in total.
    """

    def __init__(self, prefix: str, errors: list[str]) -> None:
        self.errors = list(errors)
        summary = f"{prefix}: {'; '.join(self.errors)}"
        super().__init__(summary[:AGGREGATE_MESSAGE_LIMIT])
