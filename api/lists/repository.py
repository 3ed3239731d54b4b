"""
List and task persistence (raw SQL).

Tasks belong to exactly one list (`todo_tasks.list_id`) and are always read
through it, in insertion order (task id ascending).
"""

from __future__ import annotations

from typing import Any, Iterable

from core.db import Database

_LIST_COLUMNS = "id, name, created_at, updated_at"
_TASK_COLUMNS = "id, list_id, name, description, checked, created_at"


def attach_tasks(list_rows: Iterable[dict], task_rows: Iterable[dict]) -> list[dict]:
    """
    Attach each task row to its list row under `tasks`, keeping both orders.

    Task rows whose list is not in `list_rows` are dropped.
    """
    lists = [{**row, "tasks": []} for row in list_rows]
    by_id = {row["id"]: row for row in lists}
    for task in task_rows:
        owner = by_id.get(task["list_id"])
        if owner is not None:
            owner["tasks"].append(dict(task))
    return lists


class ListRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def _with_tasks(self, list_rows: list[dict]) -> list[dict]:
        if not list_rows:
            return []
        task_rows = await self._db.fetch_all(
            f"""
            SELECT {_TASK_COLUMNS}
            FROM todo_tasks
            WHERE list_id = ANY($1::bigint[])
            ORDER BY id ASC
            """,
            [int(row["id"]) for row in list_rows],
        )
        return attach_tasks(list_rows, task_rows)

    async def create_list(self, name: str) -> dict:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO todo_lists (name)
            VALUES ($1)
            RETURNING {_LIST_COLUMNS}
            """,
            name,
        )
        if row is None:
            raise RuntimeError("Failed to create list.")
        return {**row, "tasks": []}

    async def get_all_lists(self) -> list[dict]:
        rows = await self._db.fetch_all(
            f"""
            SELECT {_LIST_COLUMNS}
            FROM todo_lists
            ORDER BY created_at DESC, id DESC
            """
        )
        return await self._with_tasks(rows)

    async def get_lists_by_ids(self, list_ids: list[int]) -> list[dict]:
        if not list_ids:
            return []
        rows = await self._db.fetch_all(
            f"""
            SELECT {_LIST_COLUMNS}
            FROM todo_lists
            WHERE id = ANY($1::bigint[])
            ORDER BY created_at DESC, id DESC
            """,
            list_ids,
        )
        return await self._with_tasks(rows)

    async def get_list(self, list_id: int) -> dict | None:
        row = await self._db.fetch_one(
            f"""
            SELECT {_LIST_COLUMNS}
            FROM todo_lists
            WHERE id = $1
            """,
            list_id,
        )
        if row is None:
            return None
        lists = await self._with_tasks([row])
        return lists[0]

    async def list_exists(self, list_id: int) -> bool:
        row = await self._db.fetch_one(
            "SELECT 1 AS ok FROM todo_lists WHERE id = $1",
            list_id,
        )
        return row is not None

    async def update_list_name(self, list_id: int, name: str) -> dict | None:
        row = await self._db.fetch_one(
            f"""
            UPDATE todo_lists
            SET name = $2, updated_at = now()
            WHERE id = $1
            RETURNING {_LIST_COLUMNS}
            """,
            list_id,
            name,
        )
        if row is None:
            return None
        lists = await self._with_tasks([row])
        return lists[0]

    async def delete_list(self, list_id: int) -> bool:
        """
        Delete a list and its tasks. Owner references are not touched here.
        """
        row = await self._db.fetch_one(
            "DELETE FROM todo_lists WHERE id = $1 RETURNING id",
            list_id,
        )
        return row is not None

    async def add_task(self, list_id: int, name: str, description: str | None) -> dict | None:
        # INSERT ... SELECT yields no row when the list is absent.
        return await self._db.fetch_one(
            f"""
            INSERT INTO todo_tasks (list_id, name, description)
            SELECT id, $2, $3
            FROM todo_lists
            WHERE id = $1
            RETURNING {_TASK_COLUMNS}
            """,
            list_id,
            name,
            description,
        )

    async def get_tasks(self, list_id: int) -> list[dict]:
        return await self._db.fetch_all(
            f"""
            SELECT {_TASK_COLUMNS}
            FROM todo_tasks
            WHERE list_id = $1
            ORDER BY id ASC
            """,
            list_id,
        )

    async def get_task(self, list_id: int, task_id: int) -> dict | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_TASK_COLUMNS}
            FROM todo_tasks
            WHERE id = $1
              AND list_id = $2
            """,
            task_id,
            list_id,
        )

    async def update_task(self, list_id: int, task_id: int, changes: dict[str, Any]) -> dict | None:
        """
        Write only the fields present in `changes` (`name`, `description`).

        Presence decides, not truthiness: `{"description": None}` clears it.
        """
        return await self._db.fetch_one(
            f"""
            UPDATE todo_tasks
            SET name = CASE WHEN $3 THEN $4 ELSE name END,
                description = CASE WHEN $5 THEN $6 ELSE description END
            WHERE id = $1
              AND list_id = $2
            RETURNING {_TASK_COLUMNS}
            """,
            task_id,
            list_id,
            "name" in changes,
            changes.get("name"),
            "description" in changes,
            changes.get("description"),
        )

    async def set_checked(self, list_id: int, task_id: int, checked: bool) -> dict | None:
        return await self._db.fetch_one(
            f"""
            UPDATE todo_tasks
            SET checked = $3
            WHERE id = $1
              AND list_id = $2
            RETURNING {_TASK_COLUMNS}
            """,
            task_id,
            list_id,
            checked,
        )

    async def delete_task(self, list_id: int, task_id: int) -> bool:
        row = await self._db.fetch_one(
            """
            DELETE FROM todo_tasks
            WHERE id = $1
              AND list_id = $2
            RETURNING id
            """,
            task_id,
            list_id,
        )
        return row is not None
