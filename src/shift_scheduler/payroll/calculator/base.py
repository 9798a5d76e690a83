from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import PayAmounts


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, *, hours_worked: Decimal, hourly_rate: Decimal, deductions: Decimal) -> PayAmounts:
        raise NotImplementedError
