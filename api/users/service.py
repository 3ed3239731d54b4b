"""
Caller-scoped list operations.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from .repository import UserRepository


async def owned_lists(user_id: int, users: UserRepository) -> list[dict]:
    user = await users.find_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return await users.list_owned_lists(user_id)
