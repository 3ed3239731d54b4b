"""
FastAPI router for registration and login.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from users.dependencies import get_user_repository
from users.repository import UserRepository

from . import dependencies, schemas, service

router = APIRouter(prefix="/auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: schemas.RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
) -> schemas.AuthResponse:
    return await service.register(payload, users)


@router.post("/login")
async def login(
    payload: schemas.LoginRequest,
    users: UserRepository = Depends(get_user_repository),
) -> schemas.AuthResponse:
    return await service.login(payload, users)


@router.get("/me")
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> schemas.UserResponse:
    return service.me(current_user)
