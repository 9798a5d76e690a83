from __future__ import annotations

from decimal import Decimal

from ..model import PayAmounts
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: gross = hours * rate, net = gross - deductions.

    No rounding, so the stored figures satisfy both equations exactly.
    """

    def compute(self, *, hours_worked: Decimal, hourly_rate: Decimal, deductions: Decimal) -> PayAmounts:
        hours = Decimal(hours_worked)
        rate = Decimal(hourly_rate)
        deducted = Decimal(deductions)
        gross = hours * rate
        return PayAmounts(
            hours_worked=hours,
            hourly_rate=rate,
            deductions=deducted,
            gross_pay=gross,
            net_pay=gross - deducted,
        )
