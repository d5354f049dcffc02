"""User-facing messages for each failing ErrorKind.

The web layer looks up the form field a message belongs to and the text to
show next to it.
"""

from __future__ import annotations

from typing import Optional

from .enums import ErrorKind

_MESSAGES: dict[ErrorKind, tuple[str, str]] = {
    ErrorKind.HALF_WIDTH_VIOLATION: ("passwordError", "Please enter the password using half-width letters and digits only"),
    ErrorKind.LENGTH_VIOLATION: ("passwordError", "Please enter a password of 8 to 16 characters"),
    ErrorKind.DUPLICATE_CODE: ("codeError", "This employee code is already in use"),
    ErrorKind.DUPLICATE_REPORT: ("reportDateError", "A report for this date has already been registered"),
    ErrorKind.ALREADY_DELETED: ("deleteError", "This record has already been deleted"),
    ErrorKind.SELF_DELETION: ("deleteError", "You cannot delete your own account"),
}


def has_message(kind: ErrorKind) -> bool:
    return kind in _MESSAGES


def error_field(kind: ErrorKind) -> Optional[str]:
    entry = _MESSAGES.get(kind)
    return entry[0] if entry else None


def error_message(kind: ErrorKind) -> Optional[str]:
    entry = _MESSAGES.get(kind)
    return entry[1] if entry else None
