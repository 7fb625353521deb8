"""/taskmanagement routes: the Task Access Boundary.

Every route depends on `current_user_id`, so authentication happens before
anything else. Request validation (path, query, body) runs next; only then
does the store look the task up under the caller's ownership.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response, status
from taskmgmt_data_access.tasks import TaskStore
from taskmgmt_shared.task_models import (
    MAX_PAGE,
    CreateTaskRequest,
    ListTasksRequest,
    UpdateTaskRequest,
)

from taskmgmt_api.dependencies import current_user_id, get_task_store
from taskmgmt_api.errors import http_error
from taskmgmt_api.schemas import CreateTaskBody, TaskOut, UpdateTaskBody

router = APIRouter(prefix="/taskmanagement", tags=["tasks"])


@router.get("", response_model=list[TaskOut])
async def list_tasks(
    response: Response,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    page_size: int = Query(10, ge=1, alias="pageSize"),
    search: str | None = Query(None, max_length=200),
    is_complete: bool | None = Query(None, alias="isComplete"),
    user_id: int = Depends(current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    result = await store.list_tasks(
        ListTasksRequest(
            owner_id=user_id,
            page=page,
            page_size=page_size,
            search_text=search,
            is_complete=is_complete,
        )
    )
    if not result.success:
        raise http_error(result)
    response.headers["X-Total-Count"] = str(result.total_count)
    return [TaskOut.from_record(task) for task in result.tasks]


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(
    task_id: int,
    user_id: int = Depends(current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    result = await store.get_task(user_id, task_id)
    if not result.success:
        raise http_error(result)
    return TaskOut.from_record(result.task)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(
    body: CreateTaskBody,
    request: Request,
    response: Response,
    user_id: int = Depends(current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    result = await store.create_task(
        CreateTaskRequest(
            owner_id=user_id,
            title=body.title,
            description=body.description or "",
            due_date=body.due_date,
        )
    )
    if not result.success:
        raise http_error(result)
    response.headers["Location"] = str(request.url_for("get_task", task_id=result.task.id))
    return TaskOut.from_record(result.task)


@router.put("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: int,
    body: UpdateTaskBody,
    user_id: int = Depends(current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    result = await store.update_task(
        UpdateTaskRequest(
            owner_id=user_id,
            task_id=task_id,
            title=body.title,
            description=body.description or "",
            due_date=body.due_date,
            is_complete=body.is_complete,
        )
    )
    if not result.success:
        raise http_error(result)
    return TaskOut.from_record(result.task)


@router.patch("/{task_id}/complete", response_model=TaskOut)
async def complete_task(
    task_id: int,
    user_id: int = Depends(current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    result = await store.complete_task(user_id, task_id)
    if not result.success:
        raise http_error(result)
    return TaskOut.from_record(result.task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    user_id: int = Depends(current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    result = await store.delete_task(user_id, task_id)
    if not result.success:
        raise http_error(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
