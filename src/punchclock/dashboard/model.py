from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminSummary:
    total_employees: int
    present_today: int
    pending_leaves: int
    avg_hours: float

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "presentToday": self.present_today,
            "pendingLeaves": self.pending_leaves,
            "avgHours": self.avg_hours,
        }


@dataclass(frozen=True)
class EmployeeSummary:
    days_present: int
    total_hours: float
    pending_leaves: int

    def to_dict(self) -> dict:
        return {
            "daysPresent": self.days_present,
            "totalHours": self.total_hours,
            "pendingLeaves": self.pending_leaves,
        }
