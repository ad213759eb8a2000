from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str],
        applied_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_all_with_requester(self) -> Sequence[LeaveRequest]:
        """Every request joined with requester name/code, newest first."""

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def decide(self, *, request_id: int, status: LeaveStatus, decided_by: int) -> bool:
        """Compare-and-set from PENDING; False when the request is no longer pending."""

        raise NotImplementedError
