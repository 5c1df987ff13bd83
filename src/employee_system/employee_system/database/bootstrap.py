from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..auth.passwords import PasswordHasher
from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)

# Installed as package data next to this module.
SCHEMA_PATH = Path(__file__).with_name("schema.sql")

DEMO_USERS = (
    ("Admin Demo", "admin@example.com", "admin123", Role.ADMIN),
    ("HR Demo", "hr@example.com", "hr123456", Role.HR),
    ("Employee Demo", "employee@example.com", "employee123", Role.EMPLOYEE),
)


_DB_SELECTION = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE|USE)\b.*?;\s*$")

# Quoted literals are kept whole so a ';' inside them never ends a statement.
_SQL_TOKENS = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|;|[^'";]+|.""", re.S)


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from schema.sql.
    return _DB_SELECTION.sub("", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    pending: list[str] = []
    for token in _SQL_TOKENS.findall(sql):
        if token != ";":
            pending.append(token)
            continue
        statement = "".join(pending).strip()
        pending = []
        if statement:
            yield statement

    statement = "".join(pending).strip()
    if statement:
        yield statement


def _connect(target: DBConfig, *, with_database: bool = True):
    # Schema DDL runs outside any pool, on a pure-Python connection.
    return mysql.connector.connect(use_pure=True, **target.connect_kwargs(with_database=with_database))


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


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", schema_path)


def ensure_demo_users(db_config: dict, *, hasher: PasswordHasher | None = None) -> None:
    """Upsert one account per role so a fresh database can be logged into."""

    hasher = hasher or PasswordHasher()
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        for name, email, password, role in DEMO_USERS:
            password_hash = hasher.hash(password)
            cur.execute("SELECT id FROM users WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    "UPDATE users SET name=%s, password_hash=%s, role=%s WHERE email=%s",
                    (name, password_hash, role.value, email),
                )
            else:
                cur.execute(
                    "INSERT INTO users (name, email, password_hash, role) VALUES (%s, %s, %s, %s)",
                    (name, email, password_hash, role.value),
                )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo users ready: %s", ", ".join(u[1] for u in DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
