from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_PASSWORD_MIN_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError
from .model import SessionUser
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: verify credentials (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def verify(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            logger.info("login failed: unknown email")
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("login failed: bad password for user_id=%s", user.user_id)
            raise AuthenticationError("Invalid email or password")

        return SessionUser.from_user(user)


class UserService:
    """Use case: create accounts.

    Public signup only ever produces employees; admins are provisioned by the
    operator (see scripts/create_admin.py).
    """

    def __init__(self, users: UserRepository, *, today: Callable[[], date] = date.today):
        self._users = users
        self._today = today

    def create_account(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role = Role.EMPLOYEE,
        phone: Optional[str] = None,
        hire_date: Optional[date] = None,
    ) -> SessionUser:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", DEFAULT_PASSWORD_MIN_LENGTH)

        if self._users.get_by_email(email):
            raise ConflictError("Email already registered")

        role = Role(role)
        phone = (phone or "").strip() or None
        hire_date = hire_date or self._today()
        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            phone=phone,
            hire_date=hire_date,
        )
        logger.info("account created: user_id=%s role=%s", user_id, role.value)

        return SessionUser(user_id=user_id, name=name, email=email, role=role, phone=phone, hire_date=hire_date)

    def signup(self, *, name: str, email: str, password: str, phone: Optional[str] = None) -> SessionUser:
        return self.create_account(name=name, email=email, password=password, role=Role.EMPLOYEE, phone=phone)
