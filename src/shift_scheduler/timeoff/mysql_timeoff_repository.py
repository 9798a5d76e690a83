from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import TimeOffStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import TimeOffRequest
from .repository import TimeOffRepository

_SELECT = """
    SELECT r.request_id, r.employee_id, r.start_date, r.end_date, r.reason, r.notes,
           r.status, r.reviewed_by, r.reviewed_at, r.admin_notes, r.created_at,
           u.name AS employee_name
    FROM time_off_requests r
    JOIN users u ON u.user_id = r.employee_id
"""


def _to_request(r: dict) -> TimeOffRequest:
    return TimeOffRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=TimeOffStatus(r["status"]),
        created_at=r.get("created_at"),
        notes=r.get("notes"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        admin_notes=r.get("admin_notes"),
        employee_name=r.get("employee_name"),
    )


class MySQLTimeOffRepository(TimeOffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        notes: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_off_requests(employee_id, start_date, end_date, reason, notes, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), start_date, end_date, reason, notes, TimeOffStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, *, request_id: int) -> Optional[TimeOffRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def decide(
        self,
        *,
        request_id: int,
        status: TimeOffStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        admin_notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_off_requests
                SET status=%s, reviewed_by=%s, reviewed_at=%s, admin_notes=COALESCE(%s, admin_notes)
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(reviewed_by),
                    reviewed_at,
                    admin_notes,
                    int(request_id),
                    TimeOffStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete_pending(self, *, request_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM time_off_requests WHERE request_id=%s AND employee_id=%s AND status=%s",
                (int(request_id), int(employee_id), TimeOffStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def list_requests(
        self,
        *,
        status: Optional[TimeOffStatus] = None,
        employee_id: Optional[int] = None,
        ends_on_or_after: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[TimeOffRequest]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("r.employee_id=%s")
            params.append(int(employee_id))
        if ends_on_or_after is not None:
            clauses.append("r.end_date>=%s")
            params.append(ends_on_or_after)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {where_clause(clauses)} ORDER BY r.created_at DESC, r.request_id DESC LIMIT %s",
                tuple(params + [int(limit)]),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def count(self, *, status: TimeOffStatus, employee_id: Optional[int] = None) -> int:
        clauses = ["status=%s"]
        params: list[object] = [status.value]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS total FROM time_off_requests WHERE {where_clause(clauses)}",
                tuple(params),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0
