from __future__ import annotations

from datetime import datetime

import pytest

from daily_report.container import Container, build_memory_container
from daily_report.database.memory import InMemoryDatabase

FAST_HASH = "pbkdf2:sha256:1000"


class Clock:
    """Settable clock handed to the services in place of now_local."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> Clock:
    return Clock(fixed_now)


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def container(db, clock) -> Container:
    return build_memory_container(db=db, password_hash_method=FAST_HASH, clock=clock)
