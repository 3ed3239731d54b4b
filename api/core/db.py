"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. `create_app()` constructs one instance
and the app lifespan connects/closes it (see `api/main.py`). Routers reach it
through the `get_database` dependency.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Transactions:
- `async with db.transaction():` binds a connection to the current task, so
  every fetch/execute issued inside the block (by any repository sharing this
  `Database`) runs on that connection and commits or rolls back together.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def auto_migrate_enabled() -> bool:
    return os.environ.get("DB_AUTO_MIGRATE", "1").strip() not in {"0", "false", "False"}


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        dsn: str | None = None,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: float | None = None,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size if min_size is not None else _env_int("DB_POOL_MIN_SIZE", 1)
        self._max_size = max_size if max_size is not None else _env_int("DB_POOL_MAX_SIZE", 5)
        self._command_timeout = (
            command_timeout if command_timeout is not None else _env_int("DB_COMMAND_TIMEOUT", 30)
        )
        self._pool: asyncpg.Pool | None = None
        self._tx_conn: ContextVar[asyncpg.Connection | None] = ContextVar("tx_conn", default=None)

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        dsn = _sanitize_database_url(self._dsn) if self._dsn else database_url()
        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            min_size=self._min_size,
            max_size=self._max_size,
            command_timeout=self._command_timeout,
        )
        logger.info("db_pool_opened min_size=%s max_size=%s", self._min_size, self._max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    def _executor(self) -> asyncpg.Connection | asyncpg.Pool:
        conn = self._tx_conn.get()
        return conn if conn is not None else self.pool()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self._tx_conn.get() is not None:
            # Nested blocks join the outer transaction.
            yield
            return

        async with self.pool().acquire() as conn:
            async with conn.transaction():
                token = self._tx_conn.set(conn)
                try:
                    yield
                finally:
                    self._tx_conn.reset(token)

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._executor().fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._executor().fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        await self._executor().execute(sql, *args)


def get_database(request: Request) -> Database:
    return request.app.state.db
