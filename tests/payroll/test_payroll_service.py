from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from shift_scheduler.core.enums import PayrollStatus, Role
from shift_scheduler.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _create(container, admin, employee, **kwargs):
    params = dict(
        period_start="2026-03-01",
        period_end="2026-03-15",
        hours_worked="80",
        hourly_rate="25.00",
        deductions="300",
    )
    params.update(kwargs)
    return container.payroll_service.create_record(
        current_role=Role.ADMIN, admin_user_id=admin.user_id, employee_id=employee.user_id, **params
    )


def _assert_consistent(record):
    assert record.gross_pay == record.hours_worked * record.hourly_rate
    assert record.net_pay == record.gross_pay - record.deductions


def test_create_computes_gross_and_net(container, admin, employee, payroll_repo):
    payroll_id = _create(container, admin, employee)

    r = payroll_repo.get_by_id(payroll_id)
    assert r.status == PayrollStatus.PENDING
    assert r.gross_pay == Decimal("2000")
    assert r.net_pay == Decimal("1700")
    _assert_consistent(r)


def test_deductions_default_to_zero(container, admin, employee, payroll_repo):
    payroll_id = _create(container, admin, employee, deductions="")

    r = payroll_repo.get_by_id(payroll_id)
    assert r.deductions == Decimal("0")
    assert r.net_pay == r.gross_pay


def test_inputs_are_rounded_to_cents_before_deriving(container, admin, employee, payroll_repo):
    payroll_id = _create(container, admin, employee, hours_worked="10.006", hourly_rate="20.499", deductions="1.234")

    r = payroll_repo.get_by_id(payroll_id)
    assert r.hours_worked == Decimal("10.01")
    assert r.hourly_rate == Decimal("20.50")
    assert r.deductions == Decimal("1.23")
    _assert_consistent(r)


@pytest.mark.parametrize(
    "field, value",
    [
        ("hours_worked", ""),
        ("hours_worked", "-1"),
        ("hourly_rate", "abc"),
        ("hourly_rate", "NaN"),
        ("deductions", "-5"),
        ("hours_worked", "1e30"),
        ("hours_worked", "100000"),
        ("hourly_rate", "100000000"),
        ("deductions", "10000000000"),
        ("period_end", "2026-02-01"),
        ("period_start", "03/01/2026"),
    ],
)
def test_invalid_input_is_rejected(container, admin, employee, payroll_repo, field, value):
    with pytest.raises(ValidationError):
        _create(container, admin, employee, **{field: value})
    assert payroll_repo.records == {}


def test_largest_storable_amounts_are_accepted(container, admin, employee, payroll_repo):
    payroll_id = _create(container, admin, employee, hours_worked="99999.99", hourly_rate="99999999.99", deductions="0")

    record = payroll_repo.get_by_id(payroll_id)
    assert record.gross_pay == Decimal("99999.99") * Decimal("99999999.99")
    assert record.net_pay == record.gross_pay


def test_missing_employee_is_rejected(container, admin):
    with pytest.raises(ValidationError):
        container.payroll_service.create_record(
            current_role=Role.ADMIN,
            admin_user_id=admin.user_id,
            employee_id="",
            period_start="2026-03-01",
            period_end="2026-03-15",
            hours_worked="1",
            hourly_rate="1",
        )


def test_employee_cannot_create_or_approve(container, admin, employee):
    payroll_id = _create(container, admin, employee)

    with pytest.raises(AuthorizationError):
        container.payroll_service.create_record(
            current_role=Role.EMPLOYEE,
            admin_user_id=employee.user_id,
            employee_id=employee.user_id,
            period_start="2026-03-01",
            period_end="2026-03-15",
            hours_worked="80",
            hourly_rate="25",
        )
    with pytest.raises(AuthorizationError):
        container.payroll_service.approve(
            current_role=Role.EMPLOYEE, admin_user_id=employee.user_id, payroll_id=payroll_id
        )


def test_update_recomputes_amounts_while_pending(container, admin, employee, payroll_repo):
    service = container.payroll_service
    payroll_id = _create(container, admin, employee)

    amounts = service.update_hours(
        current_role=Role.ADMIN,
        admin_user_id=admin.user_id,
        payroll_id=payroll_id,
        hours_worked="87",
        hourly_rate="25",
        deductions="130.50",
    )

    assert amounts.net_pay == Decimal("2044.50")
    r = payroll_repo.get_by_id(payroll_id)
    assert r.gross_pay == Decimal("2175")
    _assert_consistent(r)


def test_approved_record_is_frozen(container, admin, employee, payroll_repo):
    service = container.payroll_service
    payroll_id = _create(container, admin, employee)
    service.approve(current_role=Role.ADMIN, admin_user_id=admin.user_id, payroll_id=payroll_id)

    r = payroll_repo.get_by_id(payroll_id)
    assert r.status == PayrollStatus.APPROVED
    assert r.approved_by == admin.user_id

    with pytest.raises(NotFoundError):
        service.update_hours(
            current_role=Role.ADMIN,
            admin_user_id=admin.user_id,
            payroll_id=payroll_id,
            hours_worked="1",
            hourly_rate="1",
            deductions="0",
        )
    with pytest.raises(NotFoundError):
        service.approve(current_role=Role.ADMIN, admin_user_id=admin.user_id, payroll_id=payroll_id)
    assert payroll_repo.get_by_id(payroll_id).gross_pay == Decimal("2000")


def test_unknown_record_is_not_found(container, admin):
    with pytest.raises(NotFoundError):
        container.payroll_service.approve(current_role=Role.ADMIN, admin_user_id=admin.user_id, payroll_id=999)


def test_employee_view_upcoming_and_history(container, admin, employee, payroll_repo, clock):
    service = container.payroll_service
    paid = _create(container, admin, employee, period_start="2026-02-01", period_end="2026-02-15")
    approved = _create(container, admin, employee, period_start="2026-02-16", period_end="2026-02-28")
    _create(container, admin, employee, period_start="2026-02-20", period_end="2026-02-27")
    upcoming = _create(container, admin, employee, period_start="2026-03-01", period_end="2026-03-15")
    _create(container, admin, employee, period_start="2026-03-16", period_end="2026-03-31")
    for pid in (paid, approved):
        service.approve(current_role=Role.ADMIN, admin_user_id=admin.user_id, payroll_id=pid)
    payroll_repo.mark_paid(payroll_id=paid, paid_date=date(2026, 2, 16))

    view = service.employee_view(user_id=employee.user_id)

    assert view.upcoming.payroll_id == upcoming
    assert [r.payroll_id for r in view.history] == [approved, paid]


def test_employee_view_without_upcoming(container, employee, clock):
    clock.now = datetime(2030, 1, 1, 0, 0)

    view = container.payroll_service.employee_view(user_id=employee.user_id)

    assert view.upcoming is None
    assert list(view.history) == []


def test_admin_view_lists_pending_first(container, admin, employee, other_employee):
    service = container.payroll_service
    approved = _create(container, admin, employee, period_start="2026-03-16", period_end="2026-03-31")
    pending = _create(container, admin, other_employee, period_start="2026-03-01", period_end="2026-03-15")
    service.approve(current_role=Role.ADMIN, admin_user_id=admin.user_id, payroll_id=approved)

    view = service.admin_view()

    assert [r.payroll_id for r in view.records] == [pending, approved]
    assert view.pending_count == 1
