"""Domain error taxonomy shared by every app.

Errors are grouped by kind rather than by type: the API layer maps the kind to an
HTTP status and surfaces ``code`` and the message verbatim to the caller.
"""

import typing as t
from enum import StrEnum


class ErrorKind(StrEnum):
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    PRECONDITION_FAILED = "precondition_failed"
    UNAVAILABLE = "unavailable"


class TurnstileError(Exception):
    """Base class for errors returned to callers of the core."""

    kind: t.ClassVar[ErrorKind]
    code: t.ClassVar[str]
    default_message: t.ClassVar[str] = "The request could not be completed."

    def __init__(self, message: str | None = None, **context: t.Any) -> None:
        """Build the message from ``default_message`` unless one is given."""
        self.context = context
        self.message = message or self.default_message.format(**context)
        super().__init__(self.message)


class ConflictError(TurnstileError):
    """The request is logically invalid given the current state."""

    kind = ErrorKind.CONFLICT


class NotFoundError(TurnstileError):
    """A referenced entity does not exist or is inactive."""

    kind = ErrorKind.NOT_FOUND


class PreconditionFailedError(TurnstileError):
    """The state exists but does not yet satisfy a gating rule."""

    kind = ErrorKind.PRECONDITION_FAILED


class StoreUnavailableError(TurnstileError):
    """The ledger store could not be reached. Safe to retry."""

    kind = ErrorKind.UNAVAILABLE
    code = "store_unavailable"
    default_message = "The data store is temporarily unavailable. Please retry."
