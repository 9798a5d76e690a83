from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.constants import DATE_ONLY_HOUR
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date (expected YYYY-MM-DD)")


def pin_to_midday(day: date) -> datetime:
    """Turn a calendar day into a fixed midday instant."""
    return datetime.combine(day, time(hour=DATE_ONLY_HOUR))


def parse_date_only(value: str) -> datetime:
    return pin_to_midday(parse_iso_date(value))


def parse_clock(value: str) -> Optional[time]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return datetime.strptime(v, "%H:%M").time()
    except ValueError:
        raise ValidationError("Invalid time (expected HH:MM)")


def format_clock(value: Optional[time]) -> str:
    """Render a time as e.g. '9:00 AM' / '12:00 PM'."""
    if value is None:
        return "-"
    return value.strftime("%I:%M %p").lstrip("0")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so services can take an injectable clock.
    """
    return datetime.now()
