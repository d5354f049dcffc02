from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or the caller breaks a precondition."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class DuplicateKeyError(DomainError):
    """Raised by a store when a uniqueness constraint rejects a write.

    Carries the ErrorKind the services hand back to their caller.
    """

    def __init__(self, kind: ErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind


class StorageError(Exception):
    """Opaque infrastructure failure (connectivity, unexpected constraint)."""


class StaleRowError(DomainError):
    """Raised by a store when an update finds no active row to change."""
