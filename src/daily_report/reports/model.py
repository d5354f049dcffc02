from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Report:
    """Domain entity: one employee's daily report for one calendar date."""

    id: Optional[int]
    report_date: date
    title: str
    content: str
    employee_code: str
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
