from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, employee_code, name, email, password_hash, role, department, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        employee_code=row["employee_code"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        department=row.get("department"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def exists(self, *, email: str, employee_code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM users WHERE email=%s OR employee_code=%s LIMIT 1",
                (email, employee_code),
            )
            return fetchone(cur) is not None

    def create_user(
        self,
        *,
        employee_code: str,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: Optional[str],
    ) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO users(employee_code, name, email, password_hash, role, department)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (employee_code, name, email, password_hash, role.value, department),
                )
            except mysql.connector.IntegrityError:
                return None
            return int(cur.lastrowid)

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY user_id ASC",
                (role.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]
