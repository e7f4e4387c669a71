"""
Response models shared across routers.

All JSON field names go out in camelCase.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from taskdesk.auth import User
from taskdesk.tasks import Task


class ApiModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(ApiModel):
    """Plain acknowledgment."""
    success: bool = True
    message: str


class UserSummary(ApiModel):
    """Public user fields."""
    id: str
    name: str
    email: str
    created_at: str

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.user_id,
            name=user.name,
            email=user.email,
            created_at=user.created_at
        )


class TaskOut(ApiModel):
    """Task as returned to its owner."""
    id: str
    title: str
    description: str
    status: str
    priority: str
    user_id: str
    created_at: str
    updated_at: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(
            id=task.task_id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            user_id=task.user_id,
            created_at=task.created_at,
            updated_at=task.updated_at
        )


class TaskEnvelope(ApiModel):
    """Single task response."""
    success: bool = True
    message: Optional[str] = None
    data: TaskOut
