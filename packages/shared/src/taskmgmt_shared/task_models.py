"""Task boundary models: the contract between the API and the Task Store.

Design choices:
  - Every store call carries the caller's `owner_id` explicitly. The store
    never looks up a "current user" on its own.
  - Request models validate paging bounds at construction, so an out-of-range
    page never reaches the database.
  - All Results extend PlatformResult for consistent success/failure handling.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from taskmgmt_shared.models import PlatformResult

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000

# Task ids are int4 columns; pages past MAX_PAGE would overflow a 64-bit offset.
MAX_TASK_ID = 2**31 - 1
MAX_PAGE = 2**31 - 1


class TaskRecord(BaseModel):
    """A stored task as seen by its owner."""

    id: int
    title: str
    description: str = ""
    due_date: datetime
    is_complete: bool = False
    owner_id: int


class ListTasksRequest(BaseModel):
    """Input for list_tasks: one page of the caller's tasks."""

    owner_id: int
    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    page_size: int = Field(default=10, ge=1)
    search_text: str | None = None
    is_complete: bool | None = None


class ListTasksResult(PlatformResult):
    """Result of list_tasks."""

    tasks: list[TaskRecord] = []
    total_count: int = 0
    page: int = 1
    page_size: int = 0
    has_more: bool = False


class CreateTaskRequest(BaseModel):
    """Input for create_task."""

    owner_id: int
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    due_date: datetime | None = None  # defaults to now + 7 days


class UpdateTaskRequest(BaseModel):
    """Input for update_task: replaces every mutable field of an owned task."""

    owner_id: int
    task_id: int
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    due_date: datetime | None = None  # None keeps the stored due date
    is_complete: bool = False


class TaskResult(PlatformResult):
    """Result of get_task, create_task, update_task and complete_task."""

    task: TaskRecord | None = None


class DeleteTaskResult(PlatformResult):
    """Result of delete_task."""

    deleted: bool = False
