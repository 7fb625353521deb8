"""Task Store: ownership-scoped task operations.

Every operation takes the caller's `owner_id` and folds it into the WHERE
clause of each statement, so a task owned by someone else is
indistinguishable from a task that does not exist. Each operation runs in a
single transaction (`engine.begin()`); read-then-write sequences lock the row
where the dialect supports `SELECT ... FOR UPDATE`.

Storage errors are logged with full detail and returned as STORAGE_FAILURE
results carrying a generic message. Nothing is retried here; callers decide.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from taskmgmt_shared.models import ErrorKind
from taskmgmt_shared.task_models import (
    CreateTaskRequest,
    MAX_TASK_ID,
    DeleteTaskResult,
    ListTasksRequest,
    ListTasksResult,
    TaskRecord,
    TaskResult,
    UpdateTaskRequest,
)

from taskmgmt_data_access.tables import tasks

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
DEFAULT_DUE_IN = timedelta(days=7)

NOT_FOUND_MESSAGE = "Task not found"
STORAGE_FAILURE_MESSAGE = "Task storage is unavailable"


def as_utc(value: datetime) -> datetime:
    """Return `value` as an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_record(row) -> TaskRecord:
    return TaskRecord(
        id=row.id,
        title=row.title,
        description=row.description or "",
        due_date=as_utc(row.due_date),
        is_complete=bool(row.is_complete),
        owner_id=row.owner_id,
    )


class TaskStore:
    """Scoped create/read/update/delete and paged listing of tasks."""

    def __init__(
        self,
        engine: AsyncEngine,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._engine = engine
        self._clock = clock or (lambda: datetime.now(UTC))

    async def _find_owned(self, conn: AsyncConnection, owner_id: int, task_id: int, lock: bool = False):
        """Fetch a task row matching both id and owner, or None."""
        if not 1 <= task_id <= MAX_TASK_ID:
            return None
        query = select(tasks).where(tasks.c.id == task_id, tasks.c.owner_id == owner_id)
        if lock:
            query = query.with_for_update()
        result = await conn.execute(query)
        return result.fetchone()

    # ------------------------------------------------------------------
    # list_tasks
    # ------------------------------------------------------------------

    async def list_tasks(self, request: ListTasksRequest) -> ListTasksResult:
        """Return one page of the owner's tasks, newest due date first.

        Search is a case-insensitive substring match against title or
        description; `%` and `_` in the search text match literally.
        `total_count` is the size of the filtered set before paging.
        """
        page_size = min(request.page_size, MAX_PAGE_SIZE)
        offset = (request.page - 1) * page_size

        conditions = [tasks.c.owner_id == request.owner_id]
        if request.search_text:
            conditions.append(
                or_(
                    tasks.c.title.icontains(request.search_text, autoescape=True),
                    tasks.c.description.icontains(request.search_text, autoescape=True),
                )
            )
        if request.is_complete is not None:
            conditions.append(tasks.c.is_complete == request.is_complete)

        try:
            async with self._engine.begin() as conn:
                count_q = select(func.count()).select_from(tasks).where(*conditions)
                count_result = await conn.execute(count_q)
                total_count = count_result.scalar() or 0

                data_q = (
                    select(tasks)
                    .where(*conditions)
                    .order_by(tasks.c.due_date.desc(), tasks.c.id.desc())
                    .limit(page_size)
                    .offset(offset)
                )
                data_result = await conn.execute(data_q)
                records = [_to_record(row) for row in data_result.fetchall()]
        except SQLAlchemyError:
            logger.exception(f"list_tasks failed for owner {request.owner_id}")
            return ListTasksResult.failure(ErrorKind.STORAGE_FAILURE, STORAGE_FAILURE_MESSAGE)

        return ListTasksResult(
            success=True,
            message=f"Found {total_count} tasks",
            tasks=records,
            total_count=total_count,
            page=request.page,
            page_size=page_size,
            has_more=(offset + len(records)) < total_count,
        )

    # ------------------------------------------------------------------
    # get_task
    # ------------------------------------------------------------------

    async def get_task(self, owner_id: int, task_id: int) -> TaskResult:
        """Fetch a single task the caller owns."""
        try:
            async with self._engine.begin() as conn:
                row = await self._find_owned(conn, owner_id, task_id)
        except SQLAlchemyError:
            logger.exception(f"get_task failed for task {task_id}")
            return TaskResult.failure(ErrorKind.STORAGE_FAILURE, STORAGE_FAILURE_MESSAGE)

        if row is None:
            return TaskResult.failure(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE)
        return TaskResult(success=True, message="Task found", task=_to_record(row))

    # ------------------------------------------------------------------
    # create_task
    # ------------------------------------------------------------------

    async def create_task(self, request: CreateTaskRequest) -> TaskResult:
        """Insert a new task owned by `request.owner_id`."""
        due_date = request.due_date or (self._clock() + DEFAULT_DUE_IN)

        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(
                    insert(tasks)
                    .values(
                        owner_id=request.owner_id,
                        title=request.title,
                        description=request.description,
                        due_date=as_utc(due_date),
                        is_complete=False,
                    )
                    .returning(tasks.c.id)
                )
                task_id = result.scalar()
                row = await self._find_owned(conn, request.owner_id, task_id)
        except SQLAlchemyError:
            logger.exception(f"create_task failed for owner {request.owner_id}")
            return TaskResult.failure(ErrorKind.STORAGE_FAILURE, STORAGE_FAILURE_MESSAGE)

        logger.info(f"Created task {task_id} for owner {request.owner_id}")
        return TaskResult(success=True, message="Task created", task=_to_record(row))

    # ------------------------------------------------------------------
    # update_task
    # ------------------------------------------------------------------

    async def update_task(self, request: UpdateTaskRequest) -> TaskResult:
        """Replace the mutable fields of an owned task.

        The owner is never part of the written values; it only scopes the
        lookup and the update.
        """
        try:
            async with self._engine.begin() as conn:
                existing = await self._find_owned(conn, request.owner_id, request.task_id, lock=True)
                if existing is None:
                    return TaskResult.failure(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE)

                due_date = as_utc(request.due_date) if request.due_date else existing.due_date
                await conn.execute(
                    update(tasks)
                    .where(tasks.c.id == request.task_id, tasks.c.owner_id == request.owner_id)
                    .values(
                        title=request.title,
                        description=request.description,
                        due_date=due_date,
                        is_complete=request.is_complete,
                    )
                )
                row = await self._find_owned(conn, request.owner_id, request.task_id)
        except SQLAlchemyError:
            logger.exception(f"update_task failed for task {request.task_id}")
            return TaskResult.failure(ErrorKind.STORAGE_FAILURE, STORAGE_FAILURE_MESSAGE)

        return TaskResult(success=True, message="Task updated", task=_to_record(row))

    # ------------------------------------------------------------------
    # complete_task
    # ------------------------------------------------------------------

    async def complete_task(self, owner_id: int, task_id: int) -> TaskResult:
        """Mark an owned task complete. Completing twice is not an error."""
        try:
            async with self._engine.begin() as conn:
                existing = await self._find_owned(conn, owner_id, task_id, lock=True)
                if existing is None:
                    return TaskResult.failure(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE)

                if not existing.is_complete:
                    await conn.execute(
                        update(tasks)
                        .where(tasks.c.id == task_id, tasks.c.owner_id == owner_id)
                        .values(is_complete=True)
                    )
                row = await self._find_owned(conn, owner_id, task_id)
        except SQLAlchemyError:
            logger.exception(f"complete_task failed for task {task_id}")
            return TaskResult.failure(ErrorKind.STORAGE_FAILURE, STORAGE_FAILURE_MESSAGE)

        return TaskResult(success=True, message="Task completed", task=_to_record(row))

    # ------------------------------------------------------------------
    # delete_task
    # ------------------------------------------------------------------

    async def delete_task(self, owner_id: int, task_id: int) -> DeleteTaskResult:
        """Hard-delete an owned task. A second delete reports not found."""
        try:
            async with self._engine.begin() as conn:
                existing = await self._find_owned(conn, owner_id, task_id, lock=True)
                if existing is None:
                    return DeleteTaskResult.failure(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE)

                await conn.execute(
                    delete(tasks).where(tasks.c.id == task_id, tasks.c.owner_id == owner_id)
                )
        except SQLAlchemyError:
            logger.exception(f"delete_task failed for task {task_id}")
            return DeleteTaskResult.failure(ErrorKind.STORAGE_FAILURE, STORAGE_FAILURE_MESSAGE)

        logger.info(f"Deleted task {task_id} for owner {owner_id}")
        return DeleteTaskResult(success=True, message="Task deleted", deleted=True)
