from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Callable, Optional

from ..access.gate import require_owner_or_admin
from ..common.datetime_utils import clock_time, elapsed_hours, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ConflictError, InvariantViolation, NotFoundError, ValidationError
from .model import AttendanceRecord, PunchOutResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Punch-clock state transitions for a user's day.

    A record is open from punch-in until its matching punch-out; each
    (user, date) holds at most one open record. "Today" is the calendar
    date of the server clock.
    """

    def __init__(self, attendance: AttendanceRepository, *, clock: Callable[[], datetime] = now_local):
        self._attendance = attendance
        self._clock = clock

    def punch_in(self, user_id: int, *, now: Optional[datetime] = None) -> time:
        now = now or self._clock()
        punch_in = clock_time(now)

        record_id = self._attendance.open_punch(
            user_id=int(user_id),
            work_date=now.date(),
            punch_in=punch_in,
            status=AttendanceStatus.PRESENT,
        )
        if record_id is None:
            logger.warning("user_id=%s punch-in rejected: session already open on %s", user_id, now.date())
            raise ConflictError("Already punched in today")

        logger.info("user_id=%s punched in at %s (record_id=%s)", user_id, punch_in, record_id)
        return punch_in

    def punch_out(self, user_id: int, *, now: Optional[datetime] = None) -> PunchOutResult:
        now = now or self._clock()
        today = now.date()

        record = self._attendance.get_open_for_user_and_date(int(user_id), today)
        if not record:
            raise NotFoundError("No punch-in record found")

        punch_out = clock_time(now)
        if punch_out < record.punch_in:
            raise InvariantViolation("Punch-out time is earlier than punch-in time")

        total_hours = elapsed_hours(today, record.punch_in, punch_out)

        if not self._attendance.close_punch(record_id=record.record_id, punch_out=punch_out, total_hours=total_hours):
            # Closed by a concurrent request between read and update.
            raise NotFoundError("No punch-in record found")

        logger.info("user_id=%s punched out at %s (%.2f h)", user_id, punch_out, total_hours)
        return PunchOutResult(punch_out=punch_out, total_hours=total_hours)

    def list_records(
        self,
        *,
        requester_id: int,
        requester_role: Role,
        target_user_id: int,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[AttendanceRecord]:
        require_owner_or_admin(requester_id, requester_role, target_user_id)

        if not 1 <= int(limit) <= MAX_HISTORY_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_HISTORY_LIMIT}")

        return list(self._attendance.get_recent_for_user(int(target_user_id), int(limit)))

    def today_record(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        now = now or self._clock()
        return self._attendance.get_for_user_and_date(int(user_id), now.date())
