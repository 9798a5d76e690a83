from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used by the access gate."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class ShiftType(str, Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    WEEKEND = "Weekend"


class ShiftStatus(str, Enum):
    """Shift states.

    Employee requests move through PENDING/APPROVED/DENIED, admin-posted
    shifts through OPEN/TAKEN.
    """

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    OPEN = "open"
    TAKEN = "taken"


class TimeOffStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class PayrollStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"
