from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import Role, TimeOffStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import TimeOffRequest
from .repository import TimeOffRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeTimeOffView:
    requests: Sequence[TimeOffRequest]
    approved_upcoming: Sequence[TimeOffRequest]


@dataclass(frozen=True)
class AdminTimeOffView:
    pending: Sequence[TimeOffRequest]
    approved: Sequence[TimeOffRequest]
    denied: Sequence[TimeOffRequest]


class TimeOffService:
    """Lifecycle of time-off requests.

    pending -> approved | denied (admin, reviewer and time recorded);
    pending -> deleted (owner cancels). Denied requests are kept for history.
    """

    def __init__(self, requests: TimeOffRepository, *, clock: Callable[[], datetime] = now_local):
        self._requests = requests
        self._clock = clock

    def submit(
        self,
        *,
        current_role: Role,
        user_id: int,
        start_date: str,
        end_date: str,
        reason: str,
        notes: str = "",
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can request time off")

        start: date = parse_iso_date(start_date)
        end: date = parse_iso_date(end_date)
        if end < start:
            raise ValidationError("End date must be on or after the start date")
        reason = require_non_empty(reason, "Reason")

        request_id = self._requests.create(
            employee_id=int(user_id),
            start_date=start,
            end_date=end,
            reason=reason,
            notes=(notes or "").strip() or None,
        )
        logger.info("time-off request %s submitted by employee %s", request_id, user_id)
        return request_id

    def cancel(self, *, current_role: Role, user_id: int, request_id: int) -> None:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can cancel their requests")

        if not self._requests.delete_pending(request_id=int(request_id), employee_id=int(user_id)):
            logger.warning("employee %s could not cancel time-off request %s", user_id, request_id)
            raise NotFoundError("Request not found or cannot be canceled")
        logger.info("time-off request %s canceled by employee %s", request_id, user_id)

    def _decide(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        status: TimeOffStatus,
        admin_notes: str,
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to do that")

        ok = self._requests.decide(
            request_id=int(request_id),
            status=status,
            reviewed_by=int(admin_user_id),
            reviewed_at=self._clock(),
            admin_notes=(admin_notes or "").strip() or None,
        )
        if not ok:
            raise NotFoundError("Request not found")
        logger.info("time-off request %s %s by admin %s", request_id, status.value, admin_user_id)

    def approve(self, *, current_role: Role, admin_user_id: int, request_id: int, admin_notes: str = "") -> None:
        self._decide(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            status=TimeOffStatus.APPROVED,
            admin_notes=admin_notes,
        )

    def deny(self, *, current_role: Role, admin_user_id: int, request_id: int, admin_notes: str = "") -> None:
        self._decide(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            status=TimeOffStatus.DENIED,
            admin_notes=admin_notes,
        )

    def employee_view(self, *, user_id: int) -> EmployeeTimeOffView:
        today = self._clock().date()
        return EmployeeTimeOffView(
            requests=self._requests.list_requests(employee_id=int(user_id)),
            approved_upcoming=sorted(
                self._requests.list_requests(
                    employee_id=int(user_id),
                    status=TimeOffStatus.APPROVED,
                    ends_on_or_after=today,
                ),
                key=lambda r: r.start_date,
            ),
        )

    def admin_view(self) -> AdminTimeOffView:
        return AdminTimeOffView(
            pending=self._requests.list_requests(status=TimeOffStatus.PENDING, limit=DEFAULT_LIST_LIMIT),
            approved=sorted(
                self._requests.list_requests(status=TimeOffStatus.APPROVED, limit=DEFAULT_LIST_LIMIT),
                key=lambda r: r.start_date,
            ),
            denied=self._requests.list_requests(status=TimeOffStatus.DENIED, limit=DEFAULT_LIST_LIMIT),
        )

    def count_pending(self, *, user_id: Optional[int] = None) -> int:
        return self._requests.count(status=TimeOffStatus.PENDING, employee_id=user_id)
