"""
FastAPI router for the caller's own lists.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.db import Database, get_database
from lists import schemas as list_schemas
from lists import service as list_service
from lists.dependencies import get_list_repository
from lists.repository import ListRepository

from . import service
from .dependencies import get_user_repository
from .repository import UserRepository

router = APIRouter(prefix="/users")


@router.get("/lists")
async def get_owned_lists(
    current_user: dict = Depends(auth_dependencies.get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> dict:
    rows = await service.owned_lists(int(current_user["id"]), users)
    return {"lists": rows, "count": len(rows)}


@router.post("/lists")
async def create_owned_list(
    payload: list_schemas.CreateListRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    db: Database = Depends(get_database),
    lists: ListRepository = Depends(get_list_repository),
    users: UserRepository = Depends(get_user_repository),
) -> dict:
    created = await list_service.create_owned_list(
        payload.name,
        owner_id=int(current_user["id"]),
        db=db,
        lists=lists,
        users=users,
    )
    return {"success": True, "id": created["id"], "list": created}
