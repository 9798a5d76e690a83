"""Access policy gate.

Rules are flat: no session -> redirect to login; wrong role -> 403 with a
plain-text message. Authorized views get the identity as ``current_user``.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import has_request_context, redirect, request, session, url_for

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.model import SessionUser
from ..users.repository import UserRepository

logger = logging.getLogger("shift_scheduler.access")

DENIED_MESSAGES = {
    Role.ADMIN: "Access denied. Admins only.",
    Role.EMPLOYEE: "Access denied. Employees only.",
}


class AccessGate:
    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def sign_in(identity: SessionUser, *, remember: bool = True) -> None:
        session.clear()
        session.permanent = bool(remember)
        session["user_id"] = identity.user_id
        session["role"] = identity.role.value

    @staticmethod
    def sign_out() -> None:
        session.clear()

    def current_user(self) -> Optional[SessionUser]:
        user_id = session.get("user_id")
        if user_id is None:
            return None
        user = self._users.get_by_id(int(user_id))
        if user is None:
            # Account disappeared behind a live cookie.
            session.clear()
            return None
        return SessionUser.from_user(user)

    def check(self, identity: SessionUser, required: Role) -> None:
        if identity.role != required:
            logger.warning(
                "access denied: user_id=%s role=%s required=%s endpoint=%s",
                identity.user_id,
                identity.role.value,
                required.value,
                request.endpoint if has_request_context() else None,
            )
            raise AuthorizationError(DENIED_MESSAGES[required])

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = self.current_user()
            if identity is None:
                return redirect(url_for("login"))
            return view(*args, current_user=identity, **kwargs)

        return wrapper

    def role_required(self, role: Role):
        def decorator(view):
            @wraps(view)
            def checked(*args, current_user: SessionUser, **kwargs):
                self.check(current_user, role)
                return view(*args, current_user=current_user, **kwargs)

            return self.login_required(checked)

        return decorator

    def admin_required(self, view):
        return self.role_required(Role.ADMIN)(view)

    def employee_required(self, view):
        return self.role_required(Role.EMPLOYEE)(view)
