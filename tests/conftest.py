from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime

import pytest

from shift_scheduler.container import build_services
from shift_scheduler.core.enums import PayrollStatus, Role, ShiftStatus, TimeOffStatus
from shift_scheduler.payroll.model import PayrollRecord
from shift_scheduler.shifts.model import AdminPostedShift, EmployeeRequestedShift
from shift_scheduler.timeoff.model import TimeOffRequest
from shift_scheduler.users.model import User


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeUsersRepo:
    def __init__(self):
        self._next_id = 1
        self.users: dict[int, User] = {}

    def get_by_id(self, user_id):
        return self.users.get(int(user_id))

    def get_by_email(self, email):
        for u in self.users.values():
            if u.email == email:
                return u
        return None

    def create_user(self, *, name, email, password_hash, role, phone, hire_date):
        uid = self._next_id
        self._next_id += 1
        self.users[uid] = User(
            user_id=uid,
            name=name,
            email=email,
            password_hash=password_hash,
            role=Role(role),
            phone=phone,
            hire_date=hire_date,
        )
        return uid

    def list_by_role(self, role):
        return [u for u in self.users.values() if u.role == role]

    def count_by_role(self, role):
        return len(self.list_by_role(role))


class FakeShiftsRepo:
    """Conditional writes run under one lock, like a single UPDATE ... WHERE."""

    def __init__(self):
        self._next_id = 1
        self._lock = threading.Lock()
        self.shifts: dict = {}

    def _new_id(self):
        sid = self._next_id
        self._next_id += 1
        return sid

    def create_posted(self, *, shift_type, shift_date, start_time, end_time, posted_by, location, notes):
        with self._lock:
            sid = self._new_id()
            self.shifts[sid] = AdminPostedShift(
                shift_id=sid,
                shift_type=shift_type,
                shift_date=shift_date,
                status=ShiftStatus.OPEN,
                posted_by=int(posted_by),
                start_time=start_time,
                end_time=end_time,
                location=location,
                notes=notes,
            )
            return sid

    def create_request(self, *, shift_type, shift_date, requested_by, notes):
        with self._lock:
            sid = self._new_id()
            self.shifts[sid] = EmployeeRequestedShift(
                shift_id=sid,
                shift_type=shift_type,
                shift_date=shift_date,
                status=ShiftStatus.PENDING,
                posted_by=int(requested_by),
                requested_by=int(requested_by),
                assigned_to=int(requested_by),
                notes=notes,
            )
            return sid

    def get_by_id(self, shift_id):
        return self.shifts.get(int(shift_id))

    def decide_request(self, *, shift_id, status):
        with self._lock:
            s = self.shifts.get(int(shift_id))
            if not isinstance(s, EmployeeRequestedShift) or s.status != ShiftStatus.PENDING:
                return False
            self.shifts[s.shift_id] = replace(s, status=status)
            return True

    def claim_open(self, *, shift_id, employee_id):
        with self._lock:
            s = self.shifts.get(int(shift_id))
            if not isinstance(s, AdminPostedShift) or s.status != ShiftStatus.OPEN:
                return False
            self.shifts[s.shift_id] = replace(s, status=ShiftStatus.TAKEN, assigned_to=int(employee_id))
            return True

    def delete_pending_request(self, *, shift_id, requested_by):
        with self._lock:
            s = self.shifts.get(int(shift_id))
            if (
                not isinstance(s, EmployeeRequestedShift)
                or s.requested_by != int(requested_by)
                or s.status != ShiftStatus.PENDING
            ):
                return False
            del self.shifts[s.shift_id]
            return True

    def delete(self, *, shift_id):
        with self._lock:
            return self.shifts.pop(int(shift_id), None) is not None

    def _sorted(self, items):
        return sorted(items, key=lambda s: s.shift_date)

    def list_requests(self, *, requested_by=None, status=None):
        return self._sorted(
            s
            for s in self.shifts.values()
            if s.is_employee_request
            and (requested_by is None or s.requested_by == int(requested_by))
            and (status is None or s.status == status)
        )

    def list_posted(self, *, from_date=None):
        return self._sorted(
            s
            for s in self.shifts.values()
            if not s.is_employee_request and (from_date is None or s.shift_date >= from_date)
        )

    def list_assigned(self, *, employee_id=None, from_date=None):
        return self._sorted(
            s
            for s in self.shifts.values()
            if s.status in (ShiftStatus.APPROVED, ShiftStatus.TAKEN)
            and (employee_id is None or s.assigned_to == int(employee_id))
            and (from_date is None or s.shift_date >= from_date)
        )

    def count_requests(self, *, status, requested_by=None):
        return len(self.list_requests(requested_by=requested_by, status=status))


class FakeTimeOffRepo:
    def __init__(self):
        self._next_id = 1
        self._lock = threading.Lock()
        self.requests: dict[int, TimeOffRequest] = {}

    def create(self, *, employee_id, start_date, end_date, reason, notes):
        with self._lock:
            rid = self._next_id
            self._next_id += 1
            self.requests[rid] = TimeOffRequest(
                request_id=rid,
                employee_id=int(employee_id),
                start_date=start_date,
                end_date=end_date,
                reason=reason,
                status=TimeOffStatus.PENDING,
                created_at=datetime(2026, 1, 1, 9, 0),
                notes=notes,
            )
            return rid

    def get_by_id(self, *, request_id):
        return self.requests.get(int(request_id))

    def decide(self, *, request_id, status, reviewed_by, reviewed_at, admin_notes=None):
        with self._lock:
            r = self.requests.get(int(request_id))
            if not r or r.status != TimeOffStatus.PENDING:
                return False
            self.requests[r.request_id] = replace(
                r,
                status=status,
                reviewed_by=int(reviewed_by),
                reviewed_at=reviewed_at,
                admin_notes=admin_notes if admin_notes is not None else r.admin_notes,
            )
            return True

    def delete_pending(self, *, request_id, employee_id):
        with self._lock:
            r = self.requests.get(int(request_id))
            if not r or r.employee_id != int(employee_id) or r.status != TimeOffStatus.PENDING:
                return False
            del self.requests[r.request_id]
            return True

    def list_requests(self, *, status=None, employee_id=None, ends_on_or_after=None, limit=500):
        rows = [
            r
            for r in sorted(self.requests.values(), key=lambda r: r.request_id, reverse=True)
            if (status is None or r.status == status)
            and (employee_id is None or r.employee_id == int(employee_id))
            and (ends_on_or_after is None or r.end_date >= ends_on_or_after)
        ]
        return rows[: int(limit)]

    def count(self, *, status, employee_id=None):
        return len(self.list_requests(status=status, employee_id=employee_id))


class FakePayrollRepo:
    def __init__(self):
        self._next_id = 1
        self._lock = threading.Lock()
        self.records: dict[int, PayrollRecord] = {}

    def create(self, *, employee_id, period_start, period_end, amounts, notes):
        with self._lock:
            pid = self._next_id
            self._next_id += 1
            self.records[pid] = PayrollRecord(
                payroll_id=pid,
                employee_id=int(employee_id),
                period_start=period_start,
                period_end=period_end,
                hours_worked=amounts.hours_worked,
                hourly_rate=amounts.hourly_rate,
                gross_pay=amounts.gross_pay,
                deductions=amounts.deductions,
                net_pay=amounts.net_pay,
                status=PayrollStatus.PENDING,
                notes=notes,
            )
            return pid

    def get_by_id(self, payroll_id):
        return self.records.get(int(payroll_id))

    def _transition(self, payroll_id, expected, **changes):
        with self._lock:
            r = self.records.get(int(payroll_id))
            if not r or r.status != expected:
                return False
            self.records[r.payroll_id] = replace(r, **changes)
            return True

    def update_amounts(self, *, payroll_id, amounts):
        return self._transition(
            payroll_id,
            PayrollStatus.PENDING,
            hours_worked=amounts.hours_worked,
            hourly_rate=amounts.hourly_rate,
            gross_pay=amounts.gross_pay,
            deductions=amounts.deductions,
            net_pay=amounts.net_pay,
        )

    def approve(self, *, payroll_id, approved_by):
        return self._transition(
            payroll_id, PayrollStatus.PENDING, status=PayrollStatus.APPROVED, approved_by=int(approved_by)
        )

    def mark_paid(self, *, payroll_id, paid_date):
        return self._transition(payroll_id, PayrollStatus.APPROVED, status=PayrollStatus.PAID, paid_date=paid_date)

    def list_records(self, *, employee_id=None, statuses=None, limit=500):
        rows = [
            r
            for r in sorted(self.records.values(), key=lambda r: (r.period_end, r.payroll_id), reverse=True)
            if (employee_id is None or r.employee_id == int(employee_id))
            and (not statuses or r.status in statuses)
        ]
        return rows[: int(limit)]

    def next_for_employee(self, *, employee_id, on_or_after):
        rows = sorted(
            (r for r in self.records.values() if r.employee_id == int(employee_id) and r.period_end >= on_or_after),
            key=lambda r: r.period_end,
        )
        return rows[0] if rows else None


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 3, 10, 9, 30))


@pytest.fixture
def users_repo():
    return FakeUsersRepo()


@pytest.fixture
def shifts_repo():
    return FakeShiftsRepo()


@pytest.fixture
def timeoff_repo():
    return FakeTimeOffRepo()


@pytest.fixture
def payroll_repo():
    return FakePayrollRepo()


@pytest.fixture
def container(users_repo, shifts_repo, timeoff_repo, payroll_repo, clock):
    return build_services(
        users_repo=users_repo,
        shifts_repo=shifts_repo,
        timeoff_repo=timeoff_repo,
        payroll_repo=payroll_repo,
        clock=clock,
    )


@pytest.fixture
def admin(container):
    return container.user_service.create_account(
        name="Admin User", email="admin@admin.com", password="admin123", role=Role.ADMIN
    )


@pytest.fixture
def employee(container):
    return container.user_service.create_account(
        name="John Doe", email="john@example.com", password="password123", hire_date=date(2024, 1, 15)
    )


@pytest.fixture
def other_employee(container):
    return container.user_service.create_account(
        name="Jane Smith", email="jane@example.com", password="password123"
    )
