"""
Task endpoints.

Every route is owner-scoped: the caller only ever sees, changes or deletes
their own tasks. A task owned by someone else answers 404, same as a
missing one.
"""

from typing import Optional, List, Dict

from fastapi import APIRouter, Query
from fastapi import status as http_status
from pydantic import BaseModel, Field, field_validator

from ..deps import ServicesDep, CurrentIdentity
from ..schemas import ApiModel, MessageResponse, TaskOut, TaskEnvelope
from taskdesk.services import TaskQuery
from taskdesk.tasks import TaskStatus, TaskPriority, TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH

router = APIRouter()


# Request/Response models

class TaskCreateRequest(BaseModel):
    """New task. Owner is always the caller."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Title")
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH, description="Description")
    status: Optional[TaskStatus] = Field(None, description="pending, in-progress or completed")
    priority: Optional[TaskPriority] = Field(None, description="low, medium or high")

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class TaskUpdateRequest(BaseModel):
    """Partial task update; omitted fields stay unchanged."""
    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH, description="Title")
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH, description="Description")
    status: Optional[TaskStatus] = Field(None, description="pending, in-progress or completed")
    priority: Optional[TaskPriority] = Field(None, description="low, medium or high")

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class BatchDeleteRequest(ApiModel):
    """Batch delete request body: {"taskIds": [...]}."""
    task_ids: List[str] = Field(..., min_length=1, description="IDs of tasks to delete")


class TaskListResponse(ApiModel):
    """List of tasks response."""
    success: bool = True
    count: int
    data: List[TaskOut]


class BatchDeleteResponse(ApiModel):
    """Batch delete result."""
    success: bool = True
    message: str
    deleted_count: int


class TaskStatsData(ApiModel):
    """Per-user task summary."""
    total: int
    by_status: Dict[str, int]
    recent_tasks: List[TaskOut]


class TaskStatsResponse(ApiModel):
    success: bool = True
    data: TaskStatsData


def _value(enum_value) -> Optional[str]:
    return enum_value.value if enum_value is not None else None


# Endpoints
# Fixed paths (/stats, /batch) are registered before /{task_id}

@router.get("", response_model=TaskListResponse)
def list_tasks(
    identity: CurrentIdentity,
    services: ServicesDep,
    search: Optional[str] = Query(None, description="Substring of title or description"),
    status: Optional[str] = Query(None, description="pending, in-progress or completed"),
    priority: Optional[str] = Query(None, description="low, medium or high"),
    sort: Optional[str] = Query(None, description="newest (default), oldest, title or priority")
):
    """
    List the caller's tasks.

    Filters are combined; empty query values are ignored.
    """
    query = TaskQuery(
        search=search or None,
        status=status or None,
        priority=priority or None
    )
    if sort:
        query.sort = sort

    tasks = services.tasks.list_tasks(identity, query)
    return TaskListResponse(
        count=len(tasks),
        data=[TaskOut.from_task(t) for t in tasks]
    )


@router.post("", response_model=TaskEnvelope, status_code=http_status.HTTP_201_CREATED)
def create_task(
    request: TaskCreateRequest,
    identity: CurrentIdentity,
    services: ServicesDep
):
    """Create a task owned by the caller."""
    task = services.tasks.create_task(
        identity,
        title=request.title,
        description=request.description,
        status=_value(request.status),
        priority=_value(request.priority)
    )
    return TaskEnvelope(message="Task created successfully", data=TaskOut.from_task(task))


@router.get("/stats", response_model=TaskStatsResponse)
def get_stats(identity: CurrentIdentity, services: ServicesDep):
    """Task counts by status plus the 5 most recent tasks."""
    stats = services.tasks.get_stats(identity)
    return TaskStatsResponse(
        data=TaskStatsData(
            total=stats.total,
            by_status=stats.by_status,
            recent_tasks=[TaskOut.from_task(t) for t in stats.recent_tasks]
        )
    )


@router.delete("/batch", response_model=BatchDeleteResponse)
def delete_tasks(
    request: BatchDeleteRequest,
    identity: CurrentIdentity,
    services: ServicesDep
):
    """
    Delete several tasks.

    IDs that don't belong to the caller are skipped; deletedCount reports
    how many were actually removed.
    """
    deleted = services.tasks.delete_tasks(identity, request.task_ids)
    return BatchDeleteResponse(
        message=f"{deleted} tasks deleted successfully",
        deleted_count=deleted
    )


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(task_id: str, identity: CurrentIdentity, services: ServicesDep):
    """Get one of the caller's tasks."""
    task = services.tasks.get_task(identity, task_id)
    return TaskEnvelope(data=TaskOut.from_task(task))


@router.put("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    identity: CurrentIdentity,
    services: ServicesDep
):
    """Update one of the caller's tasks."""
    task = services.tasks.update_task(
        identity,
        task_id,
        title=request.title,
        description=request.description,
        status=_value(request.status),
        priority=_value(request.priority)
    )
    return TaskEnvelope(message="Task updated successfully", data=TaskOut.from_task(task))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, identity: CurrentIdentity, services: ServicesDep):
    """Delete one of the caller's tasks."""
    services.tasks.delete_task(identity, task_id)
    return MessageResponse(message="Task deleted successfully")
