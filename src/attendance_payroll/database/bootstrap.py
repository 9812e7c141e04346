"""Schema and demo-data loader for the MySQL backend.

schema.sql and seed.sql ship inside this package; both are idempotent
(CREATE TABLE IF NOT EXISTS / INSERT IGNORE) so they are safe to replay on
every start when AUTO_INIT_DB is on.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parent
SCHEMA_PATH = SQL_DIR / "schema.sql"
SEED_PATH = SQL_DIR / "seed.sql"

_DB_SELECTION = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def _prepare(sql: str) -> str:
    # The target database comes from DB_CONFIG, never from the file.
    return _LINE_COMMENT.sub("", _DB_SELECTION.sub("", sql))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted literals."""
    quote = None
    start = 0
    i = 0
    while i < len(sql):
        ch = sql[i]
        if ch == "\\" and quote:
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


@contextmanager
def _session(conn_factory: DatabaseConnection, *, with_database: bool = True) -> Iterator:
    conn = conn_factory.connect(with_database=with_database)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    with _session(conn_factory, with_database=False) as cur:
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")


def run_sql_file(conn_factory: DatabaseConnection, path: str | Path) -> int:
    statements = list(iter_sql_statements(_prepare(Path(path).read_text(encoding="utf-8"))))
    with _session(conn_factory) as cur:
        for stmt in statements:
            cur.execute(stmt)
    return len(statements)


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    count = run_sql_file(conn_factory, schema_path)
    logger.info("schema applied from %s (%d statements)", schema_path, count)


def apply_seed_sql(conn_factory: DatabaseConnection, *, seed_path: str | Path = SEED_PATH) -> None:
    count = run_sql_file(conn_factory, seed_path)
    logger.info("seed applied from %s (%d statements)", seed_path, count)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with _session(conn_factory) as cur:
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
