from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time.

    Note: Services take a clock callable defaulting to this, so tests can pin "now".
    """
    return datetime.now()
