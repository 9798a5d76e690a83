from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_non_negative_decimal
from ..core.constants import (
    CENTS,
    DEFAULT_LIST_LIMIT,
    MAX_DEDUCTIONS,
    MAX_HOURLY_RATE,
    MAX_HOURS_WORKED,
    PAYROLL_HISTORY_LIMIT,
)
from ..core.enums import PayrollStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayAmounts, PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeePayrollView:
    upcoming: Optional[PayrollRecord]
    history: Sequence[PayrollRecord]


@dataclass(frozen=True)
class AdminPayrollView:
    records: Sequence[PayrollRecord]
    pending_count: int


class PayrollService:
    """Payroll lifecycle: pending -> approved (admin) -> paid (seed data only).

    Gross and net pay are always recomputed by the calculator before a write;
    callers only ever supply hours, rate and deductions.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payroll = payroll
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to do that")

    @staticmethod
    def _cents(value, field_name: str, *, max_value: Decimal, default: Optional[Decimal] = None) -> Decimal:
        amount = require_non_negative_decimal(value, field_name, default=default, max_value=max_value)
        try:
            return amount.quantize(CENTS)
        except InvalidOperation:
            raise ValidationError(f"{field_name} must be at most {max_value}")

    def _amounts(self, hours_worked, hourly_rate, deductions) -> PayAmounts:
        # Derive gross/net from the two-decimal values that get stored.
        return self._calculator.compute(
            hours_worked=self._cents(hours_worked, "Hours worked", max_value=MAX_HOURS_WORKED),
            hourly_rate=self._cents(hourly_rate, "Hourly rate", max_value=MAX_HOURLY_RATE),
            deductions=self._cents(deductions, "Deductions", max_value=MAX_DEDUCTIONS, default=Decimal("0")),
        )

    def create_record(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        employee_id,
        period_start: str,
        period_end: str,
        hours_worked,
        hourly_rate,
        deductions=0,
        notes: str = "",
    ) -> int:
        self._require_admin(current_role)

        start: date = parse_iso_date(period_start)
        end: date = parse_iso_date(period_end)
        if end < start:
            raise ValidationError("Period end must be on or after the period start")
        try:
            employee_id = int(employee_id)
        except (TypeError, ValueError):
            raise ValidationError("Employee is required")
        if employee_id <= 0:
            raise ValidationError("Employee is required")

        payroll_id = self._payroll.create(
            employee_id=employee_id,
            period_start=start,
            period_end=end,
            amounts=self._amounts(hours_worked, hourly_rate, deductions),
            notes=(notes or "").strip() or None,
        )
        logger.info("payroll %s created for employee %s by admin %s", payroll_id, employee_id, admin_user_id)
        return payroll_id

    def update_hours(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        payroll_id: int,
        hours_worked,
        hourly_rate,
        deductions,
    ) -> PayAmounts:
        self._require_admin(current_role)

        amounts = self._amounts(hours_worked, hourly_rate, deductions)
        if not self._payroll.update_amounts(payroll_id=int(payroll_id), amounts=amounts):
            raise NotFoundError("Payroll record not found")
        logger.info("payroll %s amounts updated by admin %s", payroll_id, admin_user_id)
        return amounts

    def approve(self, *, current_role: Role, admin_user_id: int, payroll_id: int) -> None:
        self._require_admin(current_role)

        if not self._payroll.approve(payroll_id=int(payroll_id), approved_by=int(admin_user_id)):
            raise NotFoundError("Payroll record not found")
        logger.info("payroll %s approved by admin %s", payroll_id, admin_user_id)

    def employee_view(self, *, user_id: int) -> EmployeePayrollView:
        return EmployeePayrollView(
            upcoming=self.next_for_employee(user_id=user_id),
            history=self._payroll.list_records(
                employee_id=int(user_id),
                statuses=(PayrollStatus.APPROVED, PayrollStatus.PAID),
                limit=PAYROLL_HISTORY_LIMIT,
            ),
        )

    def next_for_employee(self, *, user_id: int) -> Optional[PayrollRecord]:
        return self._payroll.next_for_employee(employee_id=int(user_id), on_or_after=self._clock().date())

    def admin_view(self) -> AdminPayrollView:
        records = list(self._payroll.list_records(limit=DEFAULT_LIST_LIMIT))
        pending = [r for r in records if r.status == PayrollStatus.PENDING]
        return AdminPayrollView(
            records=pending + [r for r in records if r.status != PayrollStatus.PENDING],
            pending_count=len(pending),
        )
