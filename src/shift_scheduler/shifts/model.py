from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import ClassVar, Dict, Optional, Tuple, Union

from ..common.datetime_utils import format_clock
from ..core.enums import ShiftStatus, ShiftType

# Fixed hours an admin-posted shift gets when no explicit times are given.
SHIFT_HOURS: Dict[ShiftType, Tuple[time, time]] = {
    ShiftType.MORNING: (time(8, 0), time(16, 0)),
    ShiftType.AFTERNOON: (time(12, 0), time(20, 0)),
    ShiftType.EVENING: (time(16, 0), time(0, 0)),
    ShiftType.WEEKEND: (time(9, 0), time(17, 0)),
}

EMPLOYEE_REQUEST_STATUSES = frozenset({ShiftStatus.PENDING, ShiftStatus.APPROVED, ShiftStatus.DENIED})
POSTED_SHIFT_STATUSES = frozenset({ShiftStatus.OPEN, ShiftStatus.TAKEN})


@dataclass(frozen=True)
class ShiftBase:
    shift_id: int
    shift_type: ShiftType
    shift_date: datetime
    status: ShiftStatus
    posted_by: int


@dataclass(frozen=True)
class AdminPostedShift(ShiftBase):
    """Open slot posted by an admin; claimable by any employee while OPEN."""

    start_time: time
    end_time: time
    assigned_to: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    assignee_name: Optional[str] = None

    is_employee_request: ClassVar[bool] = False
    requested_by: ClassVar[Optional[int]] = None

    def __post_init__(self):
        if self.status not in POSTED_SHIFT_STATUSES:
            raise ValueError(f"posted shift cannot be {self.status.value}")

    @property
    def hours_label(self) -> str:
        return f"{format_clock(self.start_time)} - {format_clock(self.end_time)}"

    @property
    def is_open(self) -> bool:
        return self.status == ShiftStatus.OPEN


@dataclass(frozen=True)
class EmployeeRequestedShift(ShiftBase):
    """Slot proposed by an employee; needs admin approval."""

    requested_by: int
    assigned_to: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    requester_name: Optional[str] = None

    is_employee_request: ClassVar[bool] = True
    start_time: ClassVar[Optional[time]] = None
    end_time: ClassVar[Optional[time]] = None

    def __post_init__(self):
        if self.status not in EMPLOYEE_REQUEST_STATUSES:
            raise ValueError(f"shift request cannot be {self.status.value}")

    @property
    def hours_label(self) -> str:
        start, end = SHIFT_HOURS[self.shift_type]
        return f"{format_clock(start)} - {format_clock(end)}"

    @property
    def is_pending(self) -> bool:
        return self.status == ShiftStatus.PENDING


Shift = Union[AdminPostedShift, EmployeeRequestedShift]
