from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        """Most recent first (work_date descending)."""

        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        """Latest record of the day, open or closed."""

        raise NotImplementedError

    def get_open_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def open_punch(
        self,
        *,
        user_id: int,
        work_date: date,
        punch_in: time,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
    ) -> Optional[int]:
        """Atomically create an open record.

        Returns the new id, or None when (user_id, work_date) already has an
        open record. The check and the insert must not interleave with a
        concurrent call for the same key.
        """

        raise NotImplementedError

    def close_punch(self, *, record_id: int, punch_out: time, total_hours: float) -> bool:
        """Compare-and-set close; False when the record is no longer open."""

        raise NotImplementedError
