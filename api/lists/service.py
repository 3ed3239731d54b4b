"""
List/task business logic.

Scope:
- not-found mapping for lists and tasks
- list creation attached to the caller
- list deletion cascading to owner references, in one transaction
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.db import Database
from users.repository import UserRepository

from .repository import ListRepository

logger = logging.getLogger(__name__)

LIST_NOT_FOUND = "List not found"
TASK_NOT_FOUND = "Task not found in list"


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


async def _require_list(lists: ListRepository, list_id: int) -> None:
    if not await lists.list_exists(list_id):
        raise _not_found(LIST_NOT_FOUND)


async def all_lists(lists: ListRepository) -> list[dict]:
    return await lists.get_all_lists()


async def create_owned_list(
    name: str,
    *,
    owner_id: int,
    db: Database,
    lists: ListRepository,
    users: UserRepository,
) -> dict:
    user = await users.find_user(owner_id)
    if user is None:
        raise _not_found("User not found")

    async with db.transaction():
        created = await lists.create_list(name)
        await users.add_owned_list(owner_id, int(created["id"]))

    logger.info("list_created list_id=%s owner_id=%s", created["id"], owner_id)
    return created


async def rename_list(list_id: int, name: str, lists: ListRepository) -> dict:
    updated = await lists.update_list_name(list_id, name)
    if updated is None:
        raise _not_found(LIST_NOT_FOUND)
    return updated


async def delete_list(
    list_id: int,
    *,
    db: Database,
    lists: ListRepository,
    users: UserRepository,
) -> int:
    """
    Delete a list and scrub it from every owner. Returns the number of owner
    references removed. Both steps commit or roll back together.
    """
    async with db.transaction():
        owner_refs = await users.remove_list_from_all_owners(list_id)
        deleted = await lists.delete_list(list_id)
        if not deleted:
            raise _not_found(LIST_NOT_FOUND)

    logger.info("list_deleted list_id=%s owner_refs=%s", list_id, owner_refs)
    return owner_refs


async def list_tasks(list_id: int, lists: ListRepository) -> list[dict]:
    await _require_list(lists, list_id)
    return await lists.get_tasks(list_id)


async def add_task(
    list_id: int,
    name: str,
    description: str | None,
    lists: ListRepository,
) -> dict:
    task = await lists.add_task(list_id, name, description)
    if task is None:
        raise _not_found(LIST_NOT_FOUND)
    return task


async def update_task(list_id: int, task_id: int, changes: dict, lists: ListRepository) -> dict:
    await _require_list(lists, list_id)
    if not changes:
        task = await lists.get_task(list_id, task_id)
    else:
        task = await lists.update_task(list_id, task_id, changes)
    if task is None:
        raise _not_found(TASK_NOT_FOUND)
    return task


async def set_checked(list_id: int, task_id: int, checked: bool, lists: ListRepository) -> dict:
    await _require_list(lists, list_id)
    task = await lists.set_checked(list_id, task_id, checked)
    if task is None:
        raise _not_found(TASK_NOT_FOUND)
    return task


async def delete_task(list_id: int, task_id: int, lists: ListRepository) -> None:
    await _require_list(lists, list_id)
    if not await lists.delete_task(list_id, task_id):
        raise _not_found(TASK_NOT_FOUND)
