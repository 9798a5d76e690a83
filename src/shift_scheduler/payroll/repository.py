from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayAmounts, PayrollRecord


class PayrollRepository(Protocol):
    """Payroll persistence.

    Writes take a PayAmounts so gross/net always travel with the inputs they
    were derived from.
    """

    def create(
        self,
        *,
        employee_id: int,
        period_start: date,
        period_end: date,
        amounts: PayAmounts,
        notes: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def update_amounts(self, *, payroll_id: int, amounts: PayAmounts) -> bool:
        """Only while PENDING."""

        raise NotImplementedError

    def approve(self, *, payroll_id: int, approved_by: int) -> bool:
        """PENDING -> APPROVED."""

        raise NotImplementedError

    def mark_paid(self, *, payroll_id: int, paid_date: date) -> bool:
        """APPROVED -> PAID. Used by the seeder only; no route reaches it."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        statuses: Optional[Sequence[PayrollStatus]] = None,
        limit: int = 500,
    ) -> Sequence[PayrollRecord]:
        """Newest period first, joined with the employee's name."""

        raise NotImplementedError

    def next_for_employee(self, *, employee_id: int, on_or_after: date) -> Optional[PayrollRecord]:
        """Earliest record whose period ends on/after the given day."""

        raise NotImplementedError
