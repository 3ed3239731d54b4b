"""
Store dependencies for list/task routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_database

from .repository import ListRepository


def get_list_repository(db: Database = Depends(get_database)) -> ListRepository:
    return ListRepository(db)
