from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: str
    start_date: date
    end_date: date
    reason: Optional[str]
    status: LeaveStatus
    applied_at: datetime
    approved_by: Optional[int] = None
    # Filled only for the admin listing (joined from users).
    employee_name: Optional[str] = None
    employee_code: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.request_id,
            "user_id": self.user_id,
            "leave_type": self.leave_type,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason or "",
            "status": self.status.value,
            "applied_at": self.applied_at.isoformat(sep=" ", timespec="seconds"),
            "approved_by": self.approved_by,
        }
        if self.employee_name is not None:
            data["employee_name"] = self.employee_name
            data["employee_id"] = self.employee_code
        return data
