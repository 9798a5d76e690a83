from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TimeOffStatus


@dataclass(frozen=True)
class TimeOffRequest:
    request_id: int
    employee_id: int
    start_date: date
    end_date: date
    reason: str
    status: TimeOffStatus
    created_at: Optional[datetime] = None
    notes: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    admin_notes: Optional[str] = None
    employee_name: Optional[str] = None

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1
