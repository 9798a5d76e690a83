from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TimeOffStatus
from .model import TimeOffRequest


class TimeOffRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        notes: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, *, request_id: int) -> Optional[TimeOffRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: TimeOffStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        admin_notes: Optional[str] = None,
    ) -> bool:
        """PENDING -> status, stamping reviewer and review time."""

        raise NotImplementedError

    def delete_pending(self, *, request_id: int, employee_id: int) -> bool:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[TimeOffStatus] = None,
        employee_id: Optional[int] = None,
        ends_on_or_after: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[TimeOffRequest]:
        """Newest first, joined with the employee's name."""

        raise NotImplementedError

    def count(self, *, status: TimeOffStatus, employee_id: Optional[int] = None) -> int:
        raise NotImplementedError
