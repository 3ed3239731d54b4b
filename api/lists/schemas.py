"""
Pydantic schemas for list/task endpoints.

Field names follow the JSON the frontend sends (`task` for a task name,
`listName` for a rename).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field, StrictBool, field_validator

# Ids are BIGSERIAL; anything outside int8 can never match a row.
MAX_ID = 2**63 - 1

ListId = Annotated[int, Path(ge=1, le=MAX_ID)]
TaskId = Annotated[int, Path(ge=1, le=MAX_ID)]


def _blank_to_none(value: str | None) -> str | None:
    return value or None


class CreateListRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class RenameListRequest(BaseModel):
    listName: str = Field(..., min_length=1, max_length=200)


class AddTaskRequest(BaseModel):
    task: str = Field(..., min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=5000)

    normalize_description = field_validator("description")(_blank_to_none)


class UpdateTaskRequest(BaseModel):
    """
    Partial update. Only fields present in the body are written; an explicit
    `description` of "" or null clears it.
    """

    task: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=5000)

    normalize_description = field_validator("description")(_blank_to_none)

    @field_validator("task")
    @classmethod
    def _task_not_null(cls, value: str | None) -> str | None:
        if value is None:
            raise ValueError("task cannot be null")
        return value

    def changes(self) -> dict:
        present = self.model_dump(include=self.model_fields_set)
        changes: dict = {}
        if "task" in present:
            changes["name"] = present["task"]
        if "description" in present:
            changes["description"] = present["description"]
        return changes


class SetCheckedRequest(BaseModel):
    checked: StrictBool
