from __future__ import annotations

from decimal import Decimal

import pytest

from shift_scheduler.core.enums import PayrollStatus, ShiftStatus, TimeOffStatus
from shift_scheduler.main import create_app


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, email, password):
    return client.post("/auth/login", data={"email": email, "password": password})


@pytest.fixture
def as_admin(client, admin):
    _login(client, "admin@admin.com", "admin123")
    return client


@pytest.fixture
def as_employee(client, employee):
    _login(client, "john@example.com", "password123")
    return client


def test_home_redirects_to_login(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth/login")


def test_unknown_route_is_plain_text_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_data(as_text=True) == "Page not found"


def test_protected_page_redirects_anonymous_user(client):
    resp = client.get("/employee/shifts")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth/login")


def test_login_redirects_by_role(client, admin, employee):
    resp = _login(client, "john@example.com", "password123")
    assert resp.headers["Location"].endswith("/employee/dashboard")

    client.get("/auth/logout")
    resp = _login(client, "admin@admin.com", "admin123")
    assert resp.headers["Location"].endswith("/admin/dashboard")


def test_bad_login_goes_back_to_login_with_message(client, employee):
    resp = _login(client, "john@example.com", "nope")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth/login")

    page = client.get("/auth/login").get_data(as_text=True)
    assert "Invalid email or password" in page


def test_signup_signs_in_as_employee(client):
    resp = client.post(
        "/auth/signup",
        data={"name": "Ally Hansen", "email": "ally@example.com", "password": "password123", "role": "admin"},
    )
    assert resp.headers["Location"].endswith("/employee/dashboard")
    assert client.get("/employee/dashboard").status_code == 200
    assert client.get("/admin/dashboard").status_code == 403


def test_duplicate_signup_is_400(client, employee):
    resp = client.post(
        "/auth/signup", data={"name": "John", "email": "JOHN@example.com", "password": "password123"}
    )
    assert resp.status_code == 400
    assert resp.get_data(as_text=True) == "Email already registered"


def test_employee_is_denied_admin_pages(as_employee):
    resp = as_employee.get("/admin/shifts")
    assert resp.status_code == 403
    assert resp.get_data(as_text=True) == "Access denied. Admins only."


def test_admin_is_denied_employee_pages(as_admin):
    resp = as_admin.get("/employee/timeoff")
    assert resp.status_code == 403
    assert resp.get_data(as_text=True) == "Access denied. Employees only."


@pytest.mark.parametrize(
    "path",
    ["/employee/dashboard", "/employee/profile", "/employee/shifts", "/employee/timeoff", "/employee/payroll"],
)
def test_employee_pages_render(as_employee, path):
    assert as_employee.get(path).status_code == 200


@pytest.mark.parametrize(
    "path",
    ["/admin/dashboard", "/admin/profile", "/admin/shifts", "/admin/timeoff", "/admin/payroll"],
)
def test_admin_pages_render(as_admin, path):
    assert as_admin.get(path).status_code == 200


def test_posted_shift_shows_default_hours(as_admin, shifts_repo):
    resp = as_admin.post("/admin/shifts/create", data={"shiftType": "Weekend", "date": "2026-03-21"})
    assert resp.status_code == 302

    (shift,) = shifts_repo.shifts.values()
    assert shift.status == ShiftStatus.OPEN
    assert "9:00 AM - 5:00 PM" in as_admin.get("/admin/shifts").get_data(as_text=True)


def test_second_claim_is_404(client, admin, employee, other_employee, container):
    shift_id = container.shift_service.post_open_shift(
        current_role=admin.role, admin_user_id=admin.user_id, shift_type="Morning", shift_date="2026-03-21"
    )

    _login(client, "john@example.com", "password123")
    assert client.post(f"/employee/shifts/{shift_id}/take").status_code == 302

    client.get("/auth/logout")
    _login(client, "jane@example.com", "password123")
    resp = client.post(f"/employee/shifts/{shift_id}/take")
    assert resp.status_code == 404
    assert resp.get_data(as_text=True) == "Shift not found or no longer available"


def test_past_shift_request_is_400(as_employee, shifts_repo):
    resp = as_employee.post("/employee/shifts/create-request", data={"shiftType": "Morning", "date": "2026-03-01"})
    assert resp.status_code == 400
    assert resp.get_data(as_text=True) == "Cannot request shifts in the past"
    assert shifts_repo.shifts == {}


def test_timeoff_request_and_denial(client, admin, employee, timeoff_repo):
    _login(client, "john@example.com", "password123")
    client.post(
        "/employee/timeoff/request",
        data={"startDate": "2026-03-20", "endDate": "2026-03-22", "reason": "Vacation"},
    )
    (request_id,) = timeoff_repo.requests

    client.get("/auth/logout")
    _login(client, "admin@admin.com", "admin123")
    resp = client.post(f"/admin/timeoff/{request_id}/deny", data={"adminNotes": "Busy week"})
    assert resp.status_code == 302

    r = timeoff_repo.get_by_id(request_id=request_id)
    assert r.status == TimeOffStatus.DENIED
    assert r.admin_notes == "Busy week"
    assert client.post(f"/admin/timeoff/{request_id}/approve").status_code == 404


def test_admin_creates_and_approves_payroll(as_admin, employee, payroll_repo):
    resp = as_admin.post(
        "/admin/payroll/create",
        data={
            "employeeId": str(employee.user_id),
            "periodStart": "2026-03-01",
            "periodEnd": "2026-03-15",
            "hoursWorked": "75",
            "hourlyRate": "25",
            "deductions": "280",
        },
    )
    assert resp.status_code == 302
    (payroll_id,) = payroll_repo.records
    assert payroll_repo.get_by_id(payroll_id).net_pay == Decimal("1595")

    assert as_admin.post(f"/admin/payroll/{payroll_id}/approve").status_code == 302
    assert payroll_repo.get_by_id(payroll_id).status == PayrollStatus.APPROVED
    assert "$1,595.00" in as_admin.get("/admin/payroll").get_data(as_text=True)


def test_bad_payroll_input_is_400(as_admin, employee):
    resp = as_admin.post(
        "/admin/payroll/create",
        data={"employeeId": "abc", "periodStart": "2026-03-01", "periodEnd": "2026-03-15", "hoursWorked": "1", "hourlyRate": "1"},
    )
    assert resp.status_code == 400


def test_unexpected_error_is_generic_500(as_admin, container, monkeypatch):
    def boom():
        raise RuntimeError("database is down")

    monkeypatch.setattr(container.dashboard_service, "for_admin", boom)

    resp = as_admin.get("/admin/dashboard")
    assert resp.status_code == 500
    assert resp.get_data(as_text=True) == "Something went wrong!"
    assert "database is down" not in resp.get_data(as_text=True)


def test_oversized_payroll_amount_is_400(as_admin, employee, payroll_repo):
    resp = as_admin.post(
        "/admin/payroll/create",
        data={
            "employeeId": str(employee.user_id),
            "periodStart": "2026-03-01",
            "periodEnd": "2026-03-15",
            "hoursWorked": "1e30",
            "hourlyRate": "25",
        },
    )
    assert resp.status_code == 400
    assert resp.get_data(as_text=True) == "Hours worked must be at most 99999.99"
    assert payroll_repo.records == {}
