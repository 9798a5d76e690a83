"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_SESSION_DAYS = 7
DEFAULT_PASSWORD_MIN_LENGTH = 6

# Date-only inputs are pinned to this hour so that a timezone shift never
# moves them onto a neighbouring day.
DATE_ONLY_HOUR = 12

PAYROLL_HISTORY_LIMIT = 10
DEFAULT_LIST_LIMIT = 500

# Hours, rates and deductions are stored with two decimals.
CENTS = Decimal("0.01")

# Largest values the payroll columns hold.
MAX_HOURS_WORKED = Decimal("99999.99")
MAX_HOURLY_RATE = Decimal("99999999.99")
MAX_DEDUCTIONS = Decimal("9999999999.99")
