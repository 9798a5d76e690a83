from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, parse_clock, parse_date_only
from ..core.enums import Role, ShiftStatus, ShiftType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import SHIFT_HOURS, AdminPostedShift, EmployeeRequestedShift, Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeShiftOverview:
    my_requests: Sequence[EmployeeRequestedShift]
    approved_count: int
    denied_count: int
    pending_count: int
    posted_shifts: Sequence[AdminPostedShift]
    open_count: int
    my_taken_count: int
    upcoming_schedule: Sequence[Shift]


@dataclass(frozen=True)
class AdminShiftOverview:
    employee_requests: Sequence[EmployeeRequestedShift]
    approved_count: int
    denied_count: int
    pending_count: int
    posted_shifts: Sequence[AdminPostedShift]
    open_count: int
    taken_count: int
    assigned_shifts: Sequence[Shift]


def _count(shifts: Sequence[Shift], status: ShiftStatus) -> int:
    return sum(1 for s in shifts if s.status == status)


def parse_shift_type(value: str) -> ShiftType:
    try:
        return ShiftType((value or "").strip())
    except ValueError:
        raise ValidationError("Unknown shift type")


class ShiftService:
    """Lifecycle of shifts.

    Employee requests: pending -> approved | denied (admin), pending -> deleted
    (owner). Admin-posted shifts: open -> taken (any employee, first claim
    wins), open | taken -> deleted (admin).
    """

    def __init__(self, shifts: ShiftRepository, *, clock: Callable[[], datetime] = now_local):
        self._shifts = shifts
        self._clock = clock

    @staticmethod
    def _require(current_role: Role, required: Role) -> None:
        if current_role != required:
            raise AuthorizationError("You do not have permission to do that")

    # -------- Admin: posting --------
    def post_open_shift(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        shift_type: str,
        shift_date: str,
        start_time: str = "",
        end_time: str = "",
        location: str = "",
        notes: str = "",
    ) -> int:
        self._require(current_role, Role.ADMIN)

        kind = parse_shift_type(shift_type)
        when = parse_date_only(shift_date)
        default_start, default_end = SHIFT_HOURS[kind]
        start: time = parse_clock(start_time) or default_start
        end: time = parse_clock(end_time) or default_end

        shift_id = self._shifts.create_posted(
            shift_type=kind,
            shift_date=when,
            start_time=start,
            end_time=end,
            posted_by=int(admin_user_id),
            location=(location or "").strip() or None,
            notes=(notes or "").strip() or None,
        )
        logger.info("shift %s posted by admin %s (%s %s)", shift_id, admin_user_id, kind.value, when.date())
        return shift_id

    # -------- Employee: requests --------
    def request_shift(
        self,
        *,
        current_role: Role,
        user_id: int,
        shift_type: str,
        shift_date: str,
        notes: str = "",
    ) -> int:
        self._require(current_role, Role.EMPLOYEE)

        kind = parse_shift_type(shift_type)
        when = parse_date_only(shift_date)
        if when < self._clock():
            raise ValidationError("Cannot request shifts in the past")

        shift_id = self._shifts.create_request(
            shift_type=kind,
            shift_date=when,
            requested_by=int(user_id),
            notes=(notes or "").strip() or None,
        )
        logger.info("shift request %s created by employee %s", shift_id, user_id)
        return shift_id

    def withdraw_request(self, *, current_role: Role, user_id: int, shift_id: int) -> None:
        self._require(current_role, Role.EMPLOYEE)

        if not self._shifts.delete_pending_request(shift_id=int(shift_id), requested_by=int(user_id)):
            logger.warning("employee %s could not withdraw shift request %s", user_id, shift_id)
            raise NotFoundError("Request not found or cannot be deleted")
        logger.info("shift request %s withdrawn by employee %s", shift_id, user_id)

    def claim_open_shift(self, *, current_role: Role, user_id: int, shift_id: int) -> None:
        self._require(current_role, Role.EMPLOYEE)

        if not self._shifts.claim_open(shift_id=int(shift_id), employee_id=int(user_id)):
            logger.info("employee %s lost claim on shift %s", user_id, shift_id)
            raise NotFoundError("Shift not found or no longer available")
        logger.info("shift %s taken by employee %s", shift_id, user_id)

    # -------- Admin: decisions --------
    def _decide(self, *, current_role: Role, admin_user_id: int, shift_id: int, status: ShiftStatus) -> None:
        self._require(current_role, Role.ADMIN)

        if not self._shifts.decide_request(shift_id=int(shift_id), status=status):
            raise NotFoundError("Shift request not found")
        logger.info("shift request %s %s by admin %s", shift_id, status.value, admin_user_id)

    def approve_request(self, *, current_role: Role, admin_user_id: int, shift_id: int) -> None:
        self._decide(current_role=current_role, admin_user_id=admin_user_id, shift_id=shift_id, status=ShiftStatus.APPROVED)

    def deny_request(self, *, current_role: Role, admin_user_id: int, shift_id: int) -> None:
        self._decide(current_role=current_role, admin_user_id=admin_user_id, shift_id=shift_id, status=ShiftStatus.DENIED)

    def delete_shift(self, *, current_role: Role, admin_user_id: int, shift_id: int) -> None:
        self._require(current_role, Role.ADMIN)

        if not self._shifts.delete(shift_id=int(shift_id)):
            raise NotFoundError("Shift not found")
        logger.info("shift %s deleted by admin %s", shift_id, admin_user_id)

    # -------- Read models --------
    def get_shift(self, shift_id: int) -> Optional[Shift]:
        return self._shifts.get_by_id(int(shift_id))

    def employee_overview(self, *, user_id: int) -> EmployeeShiftOverview:
        now = self._clock()
        my_requests = self._shifts.list_requests(requested_by=int(user_id))
        posted = self._shifts.list_posted(from_date=now)

        return EmployeeShiftOverview(
            my_requests=my_requests,
            approved_count=_count(my_requests, ShiftStatus.APPROVED),
            denied_count=_count(my_requests, ShiftStatus.DENIED),
            pending_count=_count(my_requests, ShiftStatus.PENDING),
            posted_shifts=posted,
            open_count=_count(posted, ShiftStatus.OPEN),
            my_taken_count=sum(
                1 for s in posted if s.status == ShiftStatus.TAKEN and s.assigned_to == int(user_id)
            ),
            upcoming_schedule=self._shifts.list_assigned(employee_id=int(user_id), from_date=now),
        )

    def admin_overview(self) -> AdminShiftOverview:
        requests = self._shifts.list_requests()
        posted = self._shifts.list_posted()

        return AdminShiftOverview(
            employee_requests=requests,
            approved_count=_count(requests, ShiftStatus.APPROVED),
            denied_count=_count(requests, ShiftStatus.DENIED),
            pending_count=_count(requests, ShiftStatus.PENDING),
            posted_shifts=posted,
            open_count=_count(posted, ShiftStatus.OPEN),
            taken_count=_count(posted, ShiftStatus.TAKEN),
            assigned_shifts=self._shifts.list_assigned(),
        )

    def count_pending_requests(self, *, user_id: Optional[int] = None) -> int:
        return self._shifts.count_requests(status=ShiftStatus.PENDING, requested_by=user_id)
