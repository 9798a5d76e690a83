from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayAmounts:
    """Derived pay figures; only a PayrollCalculator should build these."""

    hours_worked: Decimal
    hourly_rate: Decimal
    deductions: Decimal
    gross_pay: Decimal
    net_pay: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    employee_id: int
    period_start: date
    period_end: date
    hours_worked: Decimal
    hourly_rate: Decimal
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal
    status: PayrollStatus
    approved_by: Optional[int] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    employee_name: Optional[str] = None


def format_money(value: Optional[Decimal]) -> str:
    """Render an amount as e.g. '$1,700.00'."""
    if value is None:
        return "-"
    return f"${value:,.2f}"
