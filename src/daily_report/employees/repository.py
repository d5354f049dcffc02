from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    Every read excludes soft-deleted rows.
    """

    def find_by_code(self, code: str) -> Optional[Employee]:
        raise NotImplementedError

    def find_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def insert(self, employee: Employee) -> Employee:
        """Insert only. A code held by any row, soft-deleted ones included,
        raises DuplicateKeyError(ErrorKind.DUPLICATE_CODE).
        """

        raise NotImplementedError

    def save(self, employee: Employee) -> Employee:
        """Update the active row with the same code.

        Raises StaleRowError when no active row matches.
        """

        raise NotImplementedError
