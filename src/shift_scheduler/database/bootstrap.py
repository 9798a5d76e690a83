from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Union

from ..common.datetime_utils import pin_to_midday
from ..core.enums import Role, ShiftStatus, ShiftType, TimeOffStatus
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)

# Child tables first so foreign keys never block the wipe.
SEED_TABLES = ("payroll", "time_off_requests", "shifts", "users")


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Union[str, Path]) -> None:
    """Create the database (if needed) and run every statement of schema.sql."""

    ensure_database_exists(db_config)
    sql = _strip_line_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config)), dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config)), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]


def clear_tables(conn_factory: DatabaseConnection) -> None:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for table in SEED_TABLES:
            cur.execute(f"DELETE FROM {table}")


def _midday(iso: str) -> datetime:
    return pin_to_midday(date.fromisoformat(iso))


def seed_demo_data(container: "Container") -> None:
    """Wipe all tables and load the demo accounts, shifts, time off and payroll.

    Accounts:
      admin@admin.com / admin123
      john@example.com, jane@example.com, ally@example.com / password123
    """

    if container.conn is None:
        raise RuntimeError("Demo seeding needs a MySQL-backed container")
    clear_tables(container.conn)

    users = container.user_service
    admin = users.create_account(
        name="Admin User", email="admin@admin.com", password="admin123", role=Role.ADMIN, phone="555-0001"
    )
    john = users.create_account(
        name="John Doe",
        email="john@example.com",
        password="password123",
        phone="555-0002",
        hire_date=date(2024, 1, 15),
    )
    jane = users.create_account(
        name="Jane Smith",
        email="jane@example.com",
        password="password123",
        phone="555-0003",
        hire_date=date(2024, 3, 20),
    )
    ally = users.create_account(
        name="Ally Hansen",
        email="ally@example.com",
        password="password123",
        phone="555-0004",
        hire_date=date(2024, 2, 10),
    )

    # Employee requests go straight to the repository: the demo dates may
    # already be in the past, which the service would reject.
    shifts = container.shifts_repo
    shifts.create_request(
        shift_type=ShiftType.MORNING, shift_date=_midday("2025-12-15"), requested_by=john.user_id, notes=None
    )
    jane_request = shifts.create_request(
        shift_type=ShiftType.AFTERNOON, shift_date=_midday("2025-12-20"), requested_by=jane.user_id, notes=None
    )
    shifts.decide_request(shift_id=jane_request, status=ShiftStatus.APPROVED)

    shifts.create_posted(
        shift_type=ShiftType.EVENING,
        shift_date=_midday("2025-12-18"),
        start_time=time(17, 0),
        end_time=time(23, 0),
        posted_by=admin.user_id,
        location="Main Office",
        notes=None,
    )
    shifts.create_posted(
        shift_type=ShiftType.WEEKEND,
        shift_date=_midday("2025-12-21"),
        start_time=time(9, 0),
        end_time=time(17, 0),
        posted_by=admin.user_id,
        location="Warehouse",
        notes=None,
    )
    taken = shifts.create_posted(
        shift_type=ShiftType.MORNING,
        shift_date=_midday("2025-12-22"),
        start_time=time(8, 0),
        end_time=time(16, 0),
        posted_by=admin.user_id,
        location="Main Office",
        notes=None,
    )
    shifts.claim_open(shift_id=taken, employee_id=ally.user_id)

    time_off = container.timeoff_repo
    time_off.create(
        employee_id=john.user_id,
        start_date=date(2025, 12, 25),
        end_date=date(2025, 12, 28),
        reason="Vacation",
        notes="Holiday vacation",
    )
    jane_leave = time_off.create(
        employee_id=jane.user_id,
        start_date=date(2025, 1, 5),
        end_date=date(2025, 1, 7),
        reason="Personal Leave",
        notes=None,
    )
    time_off.decide(
        request_id=jane_leave,
        status=TimeOffStatus.APPROVED,
        reviewed_by=admin.user_id,
        reviewed_at=datetime.now(),
        admin_notes="Approved - enjoy!",
    )
    time_off.create(
        employee_id=ally.user_id,
        start_date=date(2025, 12, 12),
        end_date=date(2025, 12, 13),
        reason="Sick Leave",
        notes=None,
    )

    calculator = StandardPayrollCalculator()
    payroll = container.payroll_repo
    rows = [
        # employee, period, hours, rate, deductions, status or paid date
        (john, "2025-11-01", "2025-11-15", "80", "25.00", "300.00", "2025-11-16"),
        (john, "2025-11-16", "2025-11-30", "75", "25.00", "280.00", "approved"),
        (jane, "2025-11-01", "2025-11-15", "85", "22.00", "275.00", "2025-11-16"),
        (ally, "2025-11-16", "2025-11-30", "78", "23.50", "270.00", "pending"),
        (john, "2025-12-01", "2025-12-15", "87", "25.00", "130.50", "pending"),
    ]
    for employee, start, end, hours, rate, deductions, outcome in rows:
        payroll_id = payroll.create(
            employee_id=employee.user_id,
            period_start=date.fromisoformat(start),
            period_end=date.fromisoformat(end),
            amounts=calculator.compute(
                hours_worked=Decimal(hours), hourly_rate=Decimal(rate), deductions=Decimal(deductions)
            ),
            notes=None,
        )
        if outcome == "pending":
            continue
        payroll.approve(payroll_id=payroll_id, approved_by=admin.user_id)
        if outcome != "approved":
            payroll.mark_paid(payroll_id=payroll_id, paid_date=date.fromisoformat(outcome))

    logger.info("demo data seeded: 4 users, 5 shifts, 3 time-off requests, %s payroll records", len(rows))
