"""
FastAPI router for list and task endpoints.

Reads are public; every mutation requires a bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.db import Database, get_database
from users.dependencies import get_user_repository
from users.repository import UserRepository

from . import schemas, service
from .dependencies import get_list_repository
from .repository import ListRepository

router = APIRouter(prefix="/api")


@router.get("/lists")
async def get_all_lists(lists: ListRepository = Depends(get_list_repository)) -> list[dict]:
    """
    All lists, newest first, each with its tasks.
    """
    return await service.all_lists(lists)


@router.post("/list")
async def create_list(
    payload: schemas.CreateListRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    db: Database = Depends(get_database),
    lists: ListRepository = Depends(get_list_repository),
    users: UserRepository = Depends(get_user_repository),
) -> dict:
    created = await service.create_owned_list(
        payload.name,
        owner_id=int(current_user["id"]),
        db=db,
        lists=lists,
        users=users,
    )
    return {"success": True, "id": created["id"]}


@router.put("/list/{list_id}")
async def rename_list(
    list_id: schemas.ListId,
    payload: schemas.RenameListRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
    lists: ListRepository = Depends(get_list_repository),
) -> dict:
    updated = await service.rename_list(list_id, payload.listName, lists)
    return {"success": True, "id": updated["id"], "list": updated}


@router.delete("/list/{list_id}")
async def delete_list(
    list_id: schemas.ListId,
    _: dict = Depends(auth_dependencies.get_current_user),
    db: Database = Depends(get_database),
    lists: ListRepository = Depends(get_list_repository),
    users: UserRepository = Depends(get_user_repository),
) -> dict:
    await service.delete_list(list_id, db=db, lists=lists, users=users)
    return {"success": True, "id": list_id}


@router.get("/lists/{list_id}/tasks")
async def get_tasks(
    list_id: schemas.ListId,
    lists: ListRepository = Depends(get_list_repository),
) -> list[dict]:
    return await service.list_tasks(list_id, lists)


@router.post("/lists/{list_id}/tasks")
async def add_task(
    list_id: schemas.ListId,
    payload: schemas.AddTaskRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
    lists: ListRepository = Depends(get_list_repository),
) -> dict:
    task = await service.add_task(list_id, payload.task, payload.description, lists)
    return {"success": True, "id": list_id, "task": task}


@router.put("/lists/{list_id}/tasks/{task_id}")
async def update_task(
    list_id: schemas.ListId,
    task_id: schemas.TaskId,
    payload: schemas.UpdateTaskRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
    lists: ListRepository = Depends(get_list_repository),
) -> dict:
    task = await service.update_task(list_id, task_id, payload.changes(), lists)
    return {"success": True, "id": list_id, "updatedTask": task}


@router.put("/lists/{list_id}/tasks/{task_id}/checked")
async def set_checked(
    list_id: schemas.ListId,
    task_id: schemas.TaskId,
    payload: schemas.SetCheckedRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
    lists: ListRepository = Depends(get_list_repository),
) -> dict:
    task = await service.set_checked(list_id, task_id, payload.checked, lists)
    return {"success": True, "id": list_id, "updatedTask": task}


@router.delete("/lists/{list_id}/tasks/{task_id}")
async def delete_task(
    list_id: schemas.ListId,
    task_id: schemas.TaskId,
    _: dict = Depends(auth_dependencies.get_current_user),
    lists: ListRepository = Depends(get_list_repository),
) -> dict:
    await service.delete_task(list_id, task_id, lists)
    return {"success": True, "id": list_id}
