# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions raised by the events domain.

Callers (transport layers) map these to protocol responses:
- MissingScopeError: a tenant, organization or user id was blank
- InvalidDateBoundError: a from/to bound did not match ``yyyy-MM-dd hh:mm``
- EventNotFoundError: a ranged or statistics lookup matched nothing
- EventPersistenceError: the store rejected or could not take a write
"""

DATE_BOUND_FORMAT_MESSAGE = (
    "Not able to parse the date, it has to be in the following format: `yyyy-MM-dd hh:mm`"
)


class EventServiceError(Exception):
    """Base exception for event service errors."""

    pass


class MissingScopeError(EventServiceError, ValueError):
    """Raised when a required tenant, organization or user id is blank."""

    pass


class InvalidDateBoundError(EventServiceError):
    """Raised when a date bound cannot be parsed.

    Attributes:
        value: The offending bound string.
    """

    def __init__(self, value: str) -> None:
        """Initialize the error.

        Args:
            value: The bound string that failed to parse.
        """
        super().__init__(DATE_BOUND_FORMAT_MESSAGE)
        self.value = value


class EventNotFoundError(EventServiceError):
    """Raised when a lookup that requires results finds no events."""

    pass


class EventPersistenceError(EventServiceError):
    """Raised when an event cannot be written to the store.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """Initialize the persistence error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message
