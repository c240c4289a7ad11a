"""Domain errors raised by services and mapped at the request boundary."""

from __future__ import annotations

from fastapi import status


class DomainError(Exception):
    """Base class for errors that carry a client-facing message."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised for malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(DomainError):
    """Raised when a credential is missing or invalid."""

    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(DomainError):
    """Raised when the actor lacks authority for an operation."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(DomainError):
    """Raised when a booking overlaps an active reservation."""

    status_code = status.HTTP_409_CONFLICT


class InvalidState(DomainError):
    """Raised when an entity is not in a state that permits the operation."""

    status_code = status.HTTP_400_BAD_REQUEST


__all__ = [
    "Conflict",
    "DomainError",
    "Forbidden",
    "InvalidState",
    "NotFound",
    "Unauthorized",
    "ValidationError",
]
