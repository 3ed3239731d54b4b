"""
User accounts and owned-list references (raw SQL).
"""

from __future__ import annotations

from core.db import Database

from lists.repository import ListRepository

_USER_COLUMNS = "id, email, password_hash, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def create_user(self, *, email: str, password_hash: str) -> dict:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO users (email, password_hash)
            VALUES ($1, $2)
            RETURNING {_USER_COLUMNS}
            """,
            normalize_email(email),
            password_hash,
        )
        if row is None:
            raise RuntimeError("Failed to create user.")
        return row

    async def get_user_by_email(self, email: str) -> dict | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE lower(email) = lower($1)
            """,
            normalize_email(email),
        )

    async def find_user(self, user_id: int) -> dict | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE id = $1
            """,
            user_id,
        )

    async def add_owned_list(self, user_id: int, list_id: int) -> None:
        await self._db.execute(
            """
            INSERT INTO user_lists (user_id, list_id)
            VALUES ($1, $2)
            ON CONFLICT (user_id, list_id) DO NOTHING
            """,
            user_id,
            list_id,
        )

    async def remove_owned_list(self, user_id: int, list_id: int) -> bool:
        row = await self._db.fetch_one(
            """
            DELETE FROM user_lists
            WHERE user_id = $1
              AND list_id = $2
            RETURNING list_id
            """,
            user_id,
            list_id,
        )
        return row is not None

    async def remove_list_from_all_owners(self, list_id: int) -> int:
        rows = await self._db.fetch_all(
            """
            DELETE FROM user_lists
            WHERE list_id = $1
            RETURNING user_id
            """,
            list_id,
        )
        return len(rows)

    async def owned_list_ids(self, user_id: int) -> list[int]:
        rows = await self._db.fetch_all(
            """
            SELECT list_id
            FROM user_lists
            WHERE user_id = $1
            """,
            user_id,
        )
        return [int(row["list_id"]) for row in rows]

    async def list_owned_lists(self, user_id: int) -> list[dict]:
        """
        Resolve the user's owned list ids against the list store,
        newest first, tasks included.
        """
        list_ids = await self.owned_list_ids(user_id)
        return await ListRepository(self._db).get_lists_by_ids(list_ids)
