from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_time
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one punch-clock session of a user on a calendar day."""

    record_id: int
    user_id: int
    work_date: date
    punch_in: Optional[time]
    punch_out: Optional[time]
    total_hours: Optional[float]
    status: AttendanceStatus = AttendanceStatus.PRESENT

    @property
    def is_open(self) -> bool:
        return self.punch_in is not None and self.punch_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "punch_in": format_time(self.punch_in),
            "punch_out": format_time(self.punch_out),
            "total_hours": self.total_hours,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class PunchOutResult:
    punch_out: time
    total_hours: float
