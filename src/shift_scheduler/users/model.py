from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data only, no database access.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    phone: Optional[str] = None
    hire_date: Optional[date] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """The authenticated identity handed to views and services."""

    user_id: int
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    hire_date: Optional[date] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            phone=user.phone,
            hire_date=user.hire_date,
        )
