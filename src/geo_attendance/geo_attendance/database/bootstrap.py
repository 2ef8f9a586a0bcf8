from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Optional

from ..offices.mysql_office_repository import MySQLOfficeRepository
from ..offices.service import build_office
from ..users.model import Employee
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must work whatever the configured database name is.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside quotes. ``--`` comment lines are dropped."""

    sql = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))

    buf: list[str] = []
    quote: Optional[str] = None
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
            buf.append(ch)
            continue

        if ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(conn_factory)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema %s applied to %s", schema_path, conn_factory.config.database)


def ensure_default_office(db_config: dict, payload: Optional[Mapping]) -> Optional[int]:
    """Register ``payload`` as the governing office when none exists yet."""

    if not payload:
        return None

    repo = MySQLOfficeRepository(DatabaseConnection(DBConfig.from_dict(db_config)))
    if repo.list_all():
        return None

    office_id = repo.create(build_office(payload))
    logger.info("Default office %s registered", office_id)
    return office_id


def ensure_employees(db_config: dict, employees: Iterable[Employee]) -> int:
    """Upsert directory entries by ``user_id``. Returns how many were written."""

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    written = 0
    try:
        cur = conn.cursor()
        for e in employees:
            cur.execute(
                """
                INSERT INTO employees (user_id, name, email, role, phone)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), email=VALUES(email), role=VALUES(role), phone=VALUES(phone)
                """,
                (e.user_id, e.name, e.email, e.role.value, e.phone),
            )
            written += 1
        conn.commit()
    finally:
        conn.close()
    return written


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
