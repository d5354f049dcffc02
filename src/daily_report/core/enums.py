from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role used for authorization and report visibility."""

    GENERAL = "GENERAL"
    ADMIN = "ADMIN"


class ErrorKind(str, Enum):
    """Outcome of a business-rule operation.

    Services return one of these instead of raising, so the caller can map
    each failure to a field or page message.
    """

    SUCCESS = "SUCCESS"
    HALF_WIDTH_VIOLATION = "HALF_WIDTH_VIOLATION"
    LENGTH_VIOLATION = "LENGTH_VIOLATION"
    DUPLICATE_CODE = "DUPLICATE_CODE"
    DUPLICATE_REPORT = "DUPLICATE_REPORT"
    ALREADY_DELETED = "ALREADY_DELETED"
    SELF_DELETION = "SELF_DELETION"

    @property
    def ok(self) -> bool:
        return self is ErrorKind.SUCCESS
