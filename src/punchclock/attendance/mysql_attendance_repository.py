from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, user_id, work_date, punch_in, punch_out, total_hours, status"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        punch_in=normalize_mysql_time(r.get("punch_in")),
        punch_out=normalize_mysql_time(r.get("punch_out")),
        total_hours=as_float(r.get("total_hours")),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY work_date DESC, record_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                ORDER BY record_id DESC
                LIMIT 1
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                  AND punch_in IS NOT NULL AND punch_out IS NULL
                LIMIT 1
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def open_punch(
        self,
        *,
        user_id: int,
        work_date: date,
        punch_in: time,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
    ) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the user serialises concurrent punches for that user.
            cur.execute("SELECT user_id FROM users WHERE user_id=%s FOR UPDATE", (int(user_id),))
            if not fetchall(cur):
                raise NotFoundError("User not found")

            cur.execute(
                """
                SELECT record_id
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                  AND punch_in IS NOT NULL AND punch_out IS NULL
                LIMIT 1
                FOR UPDATE
                """,
                (int(user_id), work_date),
            )
            if fetchone(cur):
                return None

            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, punch_in, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(user_id), work_date, punch_in, status.value),
                )
            except mysql.connector.IntegrityError:
                # uq_attendance_open rejected a second open record.
                return None
            return int(cur.lastrowid)

    def close_punch(self, *, record_id: int, punch_out: time, total_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_out=%s, total_hours=%s
                WHERE record_id=%s AND punch_out IS NULL
                """,
                (punch_out, total_hours, int(record_id)),
            )
            return cur.rowcount > 0
