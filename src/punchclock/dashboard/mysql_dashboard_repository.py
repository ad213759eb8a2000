from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetch_scalar
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _scalar(self, sql: str, params: tuple) -> object:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return fetch_scalar(cur, "value")

    def count_employees(self) -> int:
        return int(self._scalar("SELECT COUNT(*) AS value FROM users WHERE role=%s", (Role.EMPLOYEE.value,)) or 0)

    def count_present_on(self, work_date: date) -> int:
        value = self._scalar(
            """
            SELECT COUNT(DISTINCT a.user_id) AS value
            FROM attendance_records a
            JOIN users u ON u.user_id = a.user_id
            WHERE a.work_date=%s AND a.punch_in IS NOT NULL AND u.role=%s
            """,
            (work_date, Role.EMPLOYEE.value),
        )
        return int(value or 0)

    def count_pending_leaves(self, user_id: Optional[int] = None) -> int:
        if user_id is None:
            value = self._scalar(
                "SELECT COUNT(*) AS value FROM leave_requests WHERE status=%s",
                (LeaveStatus.PENDING.value,),
            )
        else:
            value = self._scalar(
                "SELECT COUNT(*) AS value FROM leave_requests WHERE user_id=%s AND status=%s",
                (int(user_id), LeaveStatus.PENDING.value),
            )
        return int(value or 0)

    def average_hours_since(self, start_date: date) -> Optional[float]:
        return as_float(
            self._scalar(
                "SELECT AVG(total_hours) AS value FROM attendance_records WHERE work_date >= %s",
                (start_date,),
            )
        )

    def count_records_since(self, user_id: int, start_date: date) -> int:
        value = self._scalar(
            "SELECT COUNT(*) AS value FROM attendance_records WHERE user_id=%s AND work_date >= %s",
            (int(user_id), start_date),
        )
        return int(value or 0)

    def sum_hours_since(self, user_id: int, start_date: date) -> Optional[float]:
        return as_float(
            self._scalar(
                "SELECT SUM(total_hours) AS value FROM attendance_records WHERE user_id=%s AND work_date >= %s",
                (int(user_id), start_date),
            )
        )
