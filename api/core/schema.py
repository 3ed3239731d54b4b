"""
Idempotent DDL for the todo schema.

Applied at startup when `DB_AUTO_MIGRATE` is enabled (default). Every
statement is safe to re-run against an existing database.
"""

from __future__ import annotations

import logging

from .db import Database

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id            BIGSERIAL PRIMARY KEY,
        email         TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at    TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS todo_lists (
        id         BIGSERIAL PRIMARY KEY,
        name       TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS todo_tasks (
        id          BIGSERIAL PRIMARY KEY,
        list_id     BIGINT NOT NULL REFERENCES todo_lists (id) ON DELETE CASCADE,
        name        TEXT NOT NULL,
        description TEXT,
        checked     BOOLEAN NOT NULL DEFAULT false,
        created_at  TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS todo_tasks_list_id_idx ON todo_tasks (list_id, id)
    """,
    """
    CREATE TABLE IF NOT EXISTS user_lists (
        user_id    BIGINT NOT NULL REFERENCES users (id) ON DELETE CASCADE,
        list_id    BIGINT NOT NULL REFERENCES todo_lists (id) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        PRIMARY KEY (user_id, list_id)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS user_lists_list_id_idx ON user_lists (list_id)
    """,
)


async def apply_schema(db: Database) -> None:
    async with db.transaction():
        for statement in SCHEMA_STATEMENTS:
            await db.execute(statement)
    logger.info("schema_applied statements=%s", len(SCHEMA_STATEMENTS))
