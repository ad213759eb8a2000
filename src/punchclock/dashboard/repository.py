from __future__ import annotations

from datetime import date
from typing import Optional, Protocol


class DashboardRepository(Protocol):
    """Independent read-only metric queries.

    Each method must be safe to call concurrently with the others.
    """

    def count_employees(self) -> int:
        raise NotImplementedError

    def count_present_on(self, work_date: date) -> int:
        """Distinct employees (admins excluded) with a punch-in on ``work_date``."""

        raise NotImplementedError

    def count_pending_leaves(self, user_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def average_hours_since(self, start_date: date) -> Optional[float]:
        """AVG(total_hours) over records with work_date >= start_date; None if none."""

        raise NotImplementedError

    def count_records_since(self, user_id: int, start_date: date) -> int:
        raise NotImplementedError

    def sum_hours_since(self, user_id: int, start_date: date) -> Optional[float]:
        raise NotImplementedError
