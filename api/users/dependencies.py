"""
Store dependencies for user routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_database

from .repository import UserRepository


def get_user_repository(db: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(db)
