from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Sequence

from ..core.enums import ShiftStatus, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, where_clause
from .model import AdminPostedShift, EmployeeRequestedShift, Shift
from .repository import ShiftRepository

_SELECT = """
    SELECT s.shift_id, s.shift_type, s.shift_date, s.start_time, s.end_time,
           s.assigned_to, s.requested_by, s.posted_by, s.status, s.is_employee_request,
           s.location, s.notes,
           a.name AS assignee_name, r.name AS requester_name
    FROM shifts s
    LEFT JOIN users a ON a.user_id = s.assigned_to
    LEFT JOIN users r ON r.user_id = s.requested_by
"""


def _to_shift(r: dict) -> Shift:
    common = dict(
        shift_id=int(r["shift_id"]),
        shift_type=ShiftType(r["shift_type"]),
        shift_date=r["shift_date"],
        status=ShiftStatus(r["status"]),
        posted_by=int(r["posted_by"]),
        assigned_to=r.get("assigned_to"),
        location=r.get("location"),
        notes=r.get("notes"),
    )
    if r["is_employee_request"]:
        return EmployeeRequestedShift(
            requested_by=int(r["requested_by"]),
            requester_name=r.get("requester_name"),
            **common,
        )
    return AdminPostedShift(
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        assignee_name=r.get("assignee_name"),
        **common,
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(
                    shift_type, shift_date, start_time, end_time, posted_by,
                    status, is_employee_request, location, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,0,%s,%s)
                """,
                (
                    shift_type.value,
                    shift_date,
                    start_time,
                    end_time,
                    int(posted_by),
                    ShiftStatus.OPEN.value,
                    location,
                    notes,
                ),
            )
            return int(cur.lastrowid)

    def create_request(
        self,
        *,
        shift_type: ShiftType,
        shift_date: datetime,
        requested_by: int,
        notes: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(
                    shift_type, shift_date, assigned_to, requested_by, posted_by,
                    status, is_employee_request, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,1,%s)
                """,
                (
                    shift_type.value,
                    shift_date,
                    int(requested_by),
                    int(requested_by),
                    int(requested_by),
                    ShiftStatus.PENDING.value,
                    notes,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def decide_request(self, *, shift_id: int, status: ShiftStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET status=%s
                WHERE shift_id=%s AND is_employee_request=1 AND status=%s
                """,
                (status.value, int(shift_id), ShiftStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def claim_open(self, *, shift_id: int, employee_id: int) -> bool:
        # The status check and the assignment happen in one statement, so two
        # concurrent claimants can never both see rowcount 1.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET status=%s, assigned_to=%s
                WHERE shift_id=%s AND is_employee_request=0 AND status=%s
                """,
                (ShiftStatus.TAKEN.value, int(employee_id), int(shift_id), ShiftStatus.OPEN.value),
            )
            return cur.rowcount > 0

    def delete_pending_request(self, *, shift_id: int, requested_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM shifts
                WHERE shift_id=%s AND requested_by=%s AND is_employee_request=1 AND status=%s
                """,
                (int(shift_id), int(requested_by), ShiftStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, *, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0

    def list_requests(
        self,
        *,
        requested_by: Optional[int] = None,
        status: Optional[ShiftStatus] = None,
    ) -> Sequence[EmployeeRequestedShift]:
        clauses = ["s.is_employee_request=1"]
        params: list[object] = []
        if requested_by is not None:
            clauses.append("s.requested_by=%s")
            params.append(int(requested_by))
        if status is not None:
            clauses.append("s.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {where_clause(clauses)} ORDER BY s.shift_date ASC",
                tuple(params),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def list_posted(self, *, from_date: Optional[datetime] = None) -> Sequence[AdminPostedShift]:
        clauses = ["s.is_employee_request=0"]
        params: list[object] = []
        if from_date is not None:
            clauses.append("s.shift_date>=%s")
            params.append(from_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {where_clause(clauses)} ORDER BY s.shift_date ASC",
                tuple(params),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def list_assigned(
        self,
        *,
        employee_id: Optional[int] = None,
        from_date: Optional[datetime] = None,
    ) -> Sequence[Shift]:
        clauses = ["s.status IN (%s, %s)"]
        params: list[object] = [ShiftStatus.APPROVED.value, ShiftStatus.TAKEN.value]
        if employee_id is not None:
            clauses.append("s.assigned_to=%s")
            params.append(int(employee_id))
        if from_date is not None:
            clauses.append("s.shift_date>=%s")
            params.append(from_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {where_clause(clauses)} ORDER BY s.shift_date ASC",
                tuple(params),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def count_requests(self, *, status: ShiftStatus, requested_by: Optional[int] = None) -> int:
        clauses = ["is_employee_request=1", "status=%s"]
        params: list[object] = [status.value]
        if requested_by is not None:
            clauses.append("requested_by=%s")
            params.append(int(requested_by))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM shifts WHERE {where_clause(clauses)}", tuple(params))
            row = fetchone(cur)
            return int(row["total"]) if row else 0
