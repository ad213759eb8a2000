from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    PRESENT = "present"


class LeaveStatus(str, Enum):
    """Leave request lifecycle. APPROVED and REJECTED are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


class PunchType(str, Enum):
    IN = "in"
    OUT = "out"
