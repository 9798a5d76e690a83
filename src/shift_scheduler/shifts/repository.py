from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus, ShiftType
from .model import AdminPostedShift, EmployeeRequestedShift, Shift


class ShiftRepository(Protocol):
    """Persistence for both shift variants.

    Every state change is a single conditional write; the bool/int return
    says whether a row actually matched.
    """

    def create_posted(
        self,
        *,
        shift_type: ShiftType,
        shift_date: datetime,
        start_time: time,
        end_time: time,
        posted_by: int,
        location: Optional[str],
        notes: Optional[str],
    ) -> int:
        raise NotImplementedError

    def create_request(
        self,
        *,
        shift_type: ShiftType,
        shift_date: datetime,
        requested_by: int,
        notes: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def decide_request(self, *, shift_id: int, status: ShiftStatus) -> bool:
        """PENDING employee request -> status."""

        raise NotImplementedError

    def claim_open(self, *, shift_id: int, employee_id: int) -> bool:
        """Atomically OPEN -> TAKEN with assigned_to=employee_id."""

        raise NotImplementedError

    def delete_pending_request(self, *, shift_id: int, requested_by: int) -> bool:
        raise NotImplementedError

    def delete(self, *, shift_id: int) -> bool:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        requested_by: Optional[int] = None,
        status: Optional[ShiftStatus] = None,
    ) -> Sequence[EmployeeRequestedShift]:
        """Employee requests ordered by date, with requester names."""

        raise NotImplementedError

    def list_posted(self, *, from_date: Optional[datetime] = None) -> Sequence[AdminPostedShift]:
        """Admin-posted shifts ordered by date, with assignee names."""

        raise NotImplementedError

    def list_assigned(
        self,
        *,
        employee_id: Optional[int] = None,
        from_date: Optional[datetime] = None,
    ) -> Sequence[Shift]:
        """Approved requests plus taken shifts (the working schedule)."""

        raise NotImplementedError

    def count_requests(self, *, status: ShiftStatus, requested_by: Optional[int] = None) -> int:
        raise NotImplementedError
