from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .common.access import AccessGate
from .common.datetime_utils import now_local
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .timeoff.mysql_timeoff_repository import MySQLTimeOffRepository
from .timeoff.repository import TimeOffRepository
from .timeoff.service import TimeOffService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    shifts_repo: ShiftRepository
    timeoff_repo: TimeOffRepository
    payroll_repo: PayrollRepository

    access_gate: AccessGate
    auth_service: AuthService
    user_service: UserService
    shift_service: ShiftService
    timeoff_service: TimeOffService
    payroll_service: PayrollService
    dashboard_service: DashboardService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users_repo: UserRepository,
    shifts_repo: ShiftRepository,
    timeoff_repo: TimeOffRepository,
    payroll_repo: PayrollRepository,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    shift_service = ShiftService(shifts_repo, clock=clock)
    timeoff_service = TimeOffService(timeoff_repo, clock=clock)
    payroll_service = PayrollService(payroll_repo, clock=clock)

    return Container(
        users_repo=users_repo,
        shifts_repo=shifts_repo,
        timeoff_repo=timeoff_repo,
        payroll_repo=payroll_repo,
        access_gate=AccessGate(users_repo),
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, today=lambda: clock().date()),
        shift_service=shift_service,
        timeoff_service=timeoff_service,
        payroll_service=payroll_service,
        dashboard_service=DashboardService(users_repo, shift_service, timeoff_service, payroll_service),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        timeoff_repo=MySQLTimeOffRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        conn=conn,
    )
