from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..payroll.model import PayrollRecord
from ..payroll.service import PayrollService
from ..shifts.service import ShiftService
from ..timeoff.service import TimeOffService
from ..users.repository import UserRepository


@dataclass(frozen=True)
class EmployeeDashboard:
    pending_time_off: int
    pending_shift_requests: int
    next_payroll: Optional[PayrollRecord]


@dataclass(frozen=True)
class AdminDashboard:
    pending_shift_requests: int
    pending_time_off: int
    total_employees: int


class DashboardService:
    """Landing-page counters for both roles."""

    def __init__(self, users: UserRepository, shifts: ShiftService, time_off: TimeOffService, payroll: PayrollService):
        self._users = users
        self._shifts = shifts
        self._time_off = time_off
        self._payroll = payroll

    def for_employee(self, *, user_id: int) -> EmployeeDashboard:
        return EmployeeDashboard(
            pending_time_off=self._time_off.count_pending(user_id=int(user_id)),
            pending_shift_requests=self._shifts.count_pending_requests(user_id=int(user_id)),
            next_payroll=self._payroll.next_for_employee(user_id=int(user_id)),
        )

    def for_admin(self) -> AdminDashboard:
        return AdminDashboard(
            pending_shift_requests=self._shifts.count_pending_requests(),
            pending_time_off=self._time_off.count_pending(),
            total_employees=self._users.count_by_role(Role.EMPLOYEE),
        )
