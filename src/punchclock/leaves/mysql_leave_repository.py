from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = (
    "r.request_id, r.user_id, r.leave_type, r.start_date, r.end_date, r.reason, "
    "r.status, r.applied_at, r.approved_by"
)


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        leave_type=r["leave_type"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason"),
        status=LeaveStatus(r["status"]),
        applied_at=r["applied_at"],
        approved_by=r.get("approved_by"),
        employee_name=r.get("employee_name"),
        employee_code=r.get("employee_code"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, start_date, end_date, reason, status, applied_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), leave_type, start_date, end_date, reason, LeaveStatus.PENDING.value, applied_at),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests r WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_all_with_requester(self) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.name AS employee_name, u.employee_code
                FROM leave_requests r
                JOIN users u ON u.user_id = r.user_id
                ORDER BY r.applied_at DESC, r.request_id DESC
                """
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests r
                WHERE r.user_id=%s
                ORDER BY r.applied_at DESC, r.request_id DESC
                """,
                (int(user_id),),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(self, *, request_id: int, status: LeaveStatus, decided_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, int(decided_by), int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
