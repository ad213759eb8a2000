from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # employee_code, name, email, password, role, department
    ("EMP001", "Admin User", "admin@company.com", "admin123", "admin", "IT"),
    ("EMP002", "Jane Employee", "jane@company.com", "employee123", "employee", "Operations"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name; drop full-line comments.
    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


_SQL_TOKEN = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|;|[^'";]+|.""", re.S)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on top-level ``;``; quoted literals stay intact."""
    buf: list[str] = []
    for token in _SQL_TOKEN.findall(sql):
        if token != ";":
            buf.append(token)
            continue
        stmt = "".join(buf).strip()
        buf = []
        if stmt:
            yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _run_script(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    if not re.fullmatch(r"[A-Za-z0-9_]+", target.database):
        raise ValueError(f"Unsafe database name: {target.database!r}")

    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)
    logger.info("Applied schema %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)
    logger.info("Applied seed %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create or refresh the demo admin/employee accounts with real hashes."""
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        for code, name, email, password, role, department in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET employee_code=%s, name=%s, password_hash=%s, role=%s, department=%s
                    WHERE email=%s
                    """,
                    (code, name, password_hash, role, department, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (employee_code, name, email, password_hash, role, department)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (code, name, email, password_hash, role, department),
                )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
