from __future__ import annotations

import re

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD, PASSWORD_MAX_LENGTH, PASSWORD_MIN_LENGTH
from ..core.enums import ErrorKind

_HALF_WIDTH = re.compile(r"[A-Za-z0-9]+")


class PasswordPolicy:
    """Password rules for employee accounts.

    A password must be half-width alphanumerics only, then 8 to 16 characters
    long. The character check runs first, so a password failing both reports
    HALF_WIDTH_VIOLATION.
    """

    def __init__(
        self,
        *,
        min_length: int = PASSWORD_MIN_LENGTH,
        max_length: int = PASSWORD_MAX_LENGTH,
        hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    ):
        self._min_length = min_length
        self._max_length = max_length
        self._hash_method = hash_method

    def validate(self, password: str) -> ErrorKind:
        if not _HALF_WIDTH.fullmatch(password or ""):
            return ErrorKind.HALF_WIDTH_VIOLATION
        if not self._min_length <= len(password) <= self._max_length:
            return ErrorKind.LENGTH_VIOLATION
        return ErrorKind.SUCCESS

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self._hash_method)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return check_password_hash(password_hash, password)
        except (ValueError, TypeError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False
