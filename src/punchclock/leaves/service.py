from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..access.gate import require_admin
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import InvalidStateTransition, NotFoundError, ValidationError
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, *, clock: Callable[[], datetime] = now_local):
        self._leaves = leaves
        self._clock = clock

    def submit(
        self,
        *,
        user_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        leave_type = require_non_empty(leave_type, "Leave type")
        if reason is not None and not isinstance(reason, str):
            raise ValidationError("Reason must be text")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        request_id = self._leaves.create(
            user_id=int(user_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=(reason or "").strip() or None,
            applied_at=(now or self._clock()).replace(microsecond=0),
        )
        logger.info("user_id=%s submitted leave request %s (%s..%s)", user_id, request_id, start_date, end_date)
        return request_id

    def list_requests(self, *, requester_id: int, requester_role: Role) -> list[LeaveRequest]:
        if requester_role == Role.ADMIN:
            return list(self._leaves.list_all_with_requester())
        return list(self._leaves.list_for_user(int(requester_id)))

    def resolve(
        self,
        *,
        request_id: int,
        resolver_id: int,
        resolver_role: Role,
        new_status: LeaveStatus | str,
    ) -> LeaveStatus:
        require_admin(resolver_role)

        try:
            status = LeaveStatus(new_status)
        except ValueError:
            status = None
        if status is None or not status.is_terminal:
            raise ValidationError("Status must be 'approved' or 'rejected'")

        current = self._leaves.get(int(request_id))
        if not current:
            raise NotFoundError("Leave request not found")
        if current.status.is_terminal:
            raise InvalidStateTransition(f"Leave request is already {current.status.value}")

        if not self._leaves.decide(request_id=int(request_id), status=status, decided_by=int(resolver_id)):
            # Another admin resolved it between read and update.
            raise InvalidStateTransition("Leave request is no longer pending")

        logger.info("Leave request %s %s by user_id=%s", request_id, status.value, resolver_id)
        return status
