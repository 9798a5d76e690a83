from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import PayAmounts, PayrollRecord
from .repository import PayrollRepository

_SELECT = """
    SELECT p.payroll_id, p.employee_id, p.period_start, p.period_end,
           p.hours_worked, p.hourly_rate, p.gross_pay, p.deductions, p.net_pay,
           p.status, p.approved_by, p.paid_date, p.notes, p.created_at,
           u.name AS employee_name
    FROM payroll p
    JOIN users u ON u.user_id = p.employee_id
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        period_start=r["period_start"],
        period_end=r["period_end"],
        hours_worked=Decimal(r["hours_worked"]),
        hourly_rate=Decimal(r["hourly_rate"]),
        gross_pay=Decimal(r["gross_pay"]),
        deductions=Decimal(r["deductions"]),
        net_pay=Decimal(r["net_pay"]),
        status=PayrollStatus(r["status"]),
        approved_by=r.get("approved_by"),
        paid_date=r.get("paid_date"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        employee_name=r.get("employee_name"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        period_start: date,
        period_end: date,
        amounts: PayAmounts,
        notes: Optional[str],
    ) -> int:
        try:
            return self._insert(employee_id, period_start, period_end, amounts, notes)
        except mysql.connector.IntegrityError as e:
            if e.errno == errorcode.ER_NO_REFERENCED_ROW_2:
                raise ValidationError("Unknown employee")
            raise

    def _insert(self, employee_id, period_start, period_end, amounts, notes) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll(
                    employee_id, period_start, period_end, hours_worked, hourly_rate,
                    gross_pay, deductions, net_pay, status, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    period_start,
                    period_end,
                    amounts.hours_worked,
                    amounts.hourly_rate,
                    amounts.gross_pay,
                    amounts.deductions,
                    amounts.net_pay,
                    PayrollStatus.PENDING.value,
                    notes,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE p.payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def update_amounts(self, *, payroll_id: int, amounts: PayAmounts) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll
                SET hours_worked=%s, hourly_rate=%s, gross_pay=%s, deductions=%s, net_pay=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (
                    amounts.hours_worked,
                    amounts.hourly_rate,
                    amounts.gross_pay,
                    amounts.deductions,
                    amounts.net_pay,
                    int(payroll_id),
                    PayrollStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def approve(self, *, payroll_id: int, approved_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll SET status=%s, approved_by=%s WHERE payroll_id=%s AND status=%s",
                (PayrollStatus.APPROVED.value, int(approved_by), int(payroll_id), PayrollStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def mark_paid(self, *, payroll_id: int, paid_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll SET status=%s, paid_date=%s WHERE payroll_id=%s AND status=%s",
                (PayrollStatus.PAID.value, paid_date, int(payroll_id), PayrollStatus.APPROVED.value),
            )
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        statuses: Optional[Sequence[PayrollStatus]] = None,
        limit: int = 500,
    ) -> Sequence[PayrollRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if employee_id is not None:
            clauses.append("p.employee_id=%s")
            params.append(int(employee_id))
        if statuses:
            clauses.append(f"p.status IN ({', '.join(['%s'] * len(statuses))})")
            params.extend(s.value for s in statuses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {where_clause(clauses)} ORDER BY p.period_end DESC, p.payroll_id DESC LIMIT %s",
                tuple(params + [int(limit)]),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def next_for_employee(self, *, employee_id: int, on_or_after: date) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE p.employee_id=%s AND p.period_end>=%s ORDER BY p.period_end ASC LIMIT 1",
                (int(employee_id), on_or_after),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None
