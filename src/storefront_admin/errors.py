"""
Application error taxonomy.

Every failure a resolver can report is an ``AdminError``. The subclasses only
narrow the ``kind`` so callers and tests can tell the categories apart; at the
GraphQL boundary they all surface the same way, as one error carrying the
message and its category.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTH = "authentication"
    INVARIANT = "invariant"
    INTERNAL = "internal"


class AdminError(Exception):
    """Single application-level error reported to GraphQL clients."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return self.message


class ValidationError(AdminError):
    """Missing or malformed input."""

    kind = ErrorKind.VALIDATION


class NotFoundError(AdminError):
    """Requested record or referenced foreign key does not exist."""

    kind = ErrorKind.NOT_FOUND


class AuthError(AdminError):
    """Bad credentials, inactive account or missing authentication."""

    kind = ErrorKind.AUTH


class InvariantError(AdminError):
    """A business invariant would be broken by the operation."""

    kind = ErrorKind.INVARIANT


@contextmanager
def wrap_errors() -> Iterator[None]:
    """Re-raise any foreign exception as an ``AdminError`` with the same message."""
    try:
        yield
    except AdminError:
        raise
    except Exception as e:
        raise AdminError(str(e) or type(e).__name__, ErrorKind.INTERNAL) from e
