from __future__ import annotations

from typing import ContextManager, Protocol


class TransactionManager(Protocol):
    """Unit-of-work boundary the services wrap their check-then-write in.

    Implementations must let an inner ``transaction()`` join an outer one, so a
    cascade and the write that follows it commit or roll back together.
    """

    def transaction(self) -> ContextManager[None]:
        raise NotImplementedError
