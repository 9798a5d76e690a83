from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str) -> str:
    email = require_non_empty(value, "Email").lower()
    local, _, domain = email.partition("@")
    if not local or not domain:
        raise ValidationError("Email is not valid")
    return email


def require_non_negative_decimal(
    value: Union[str, int, float, Decimal, None],
    field_name: str,
    *,
    default: Optional[Decimal] = None,
    max_value: Optional[Decimal] = None,
) -> Decimal:
    if value is None or str(value).strip() == "":
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    raw = str(value).strip()
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field_name} must be zero or more")
    if max_value is not None and amount > max_value:
        raise ValidationError(f"{field_name} must be at most {max_value}")
    return amount
