"""Wire models for the HTTP surface.

JSON uses camelCase (`dueDate`, `isComplete`); Python attributes stay
snake_case. Unknown body fields are ignored, so a client-supplied `ownerId`
never reaches the store.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from taskmgmt_shared.task_models import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TaskRecord


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CredentialsBody(CamelModel):
    """Body of /auth/register and /auth/login."""

    email: str = Field(min_length=3, max_length=256)
    password: str = Field(min_length=1, max_length=256)


class TokenResponse(CamelModel):
    token: str


class MessageResponse(CamelModel):
    message: str


class CreateTaskBody(CamelModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    due_date: datetime | None = None


class UpdateTaskBody(CamelModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    due_date: datetime | None = None
    is_complete: bool


class TaskOut(CamelModel):
    """A task as returned to its owner. The owner id is never serialized."""

    id: int
    title: str
    description: str
    due_date: datetime
    is_complete: bool

    @classmethod
    def from_record(cls, record: TaskRecord) -> "TaskOut":
        return cls(
            id=record.id,
            title=record.title,
            description=record.description,
            due_date=record.due_date,
            is_complete=record.is_complete,
        )
