"""
Task data model and field rules.
"""

import uuid
from enum import Enum
from datetime import datetime, timezone
from typing import Optional, List, Dict
from dataclasses import dataclass, asdict, field

from ..errors import ValidationError

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Sort weight, higher first
PRIORITY_RANK = {
    TaskPriority.LOW.value: 0,
    TaskPriority.MEDIUM.value: 1,
    TaskPriority.HIGH.value: 2,
}


class TaskSort(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE = "title"
    PRIORITY = "priority"


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Task:
    """A task owned by exactly one user."""
    task_id: str
    title: str
    user_id: str  # Owner
    description: str = ""
    status: str = TaskStatus.PENDING.value
    priority: str = TaskPriority.MEDIUM.value
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            task_id=data["task_id"],
            title=data["title"],
            user_id=data["user_id"],
            description=data.get("description", ""),
            status=data.get("status", TaskStatus.PENDING.value),
            priority=data.get("priority", TaskPriority.MEDIUM.value),
            created_at=data.get("created_at", utc_now()),
            updated_at=data.get("updated_at", utc_now())
        )

    @classmethod
    def new(
        cls,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None
    ) -> "Task":
        """Build a fresh task for owner_id, applying defaults."""
        now = utc_now()
        return cls(
            task_id=str(uuid.uuid4()),
            title=title,
            user_id=owner_id,
            description=description or "",
            status=status or TaskStatus.PENDING.value,
            priority=priority or TaskPriority.MEDIUM.value,
            created_at=now,
            updated_at=now
        )

    def matches(self, search: Optional[str]) -> bool:
        """Case-insensitive substring match over title and description."""
        if not search:
            return True
        needle = search.casefold()
        return needle in self.title.casefold() or needle in self.description.casefold()


def validate_task_fields(
    title: Optional[str] = None,
    description: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    require_title: bool = False
) -> List[Dict[str, str]]:
    """
    Check task fields against the persistence rules.

    Only fields that are not None are checked, except title when
    require_title is set.

    Returns:
        List of {"field", "message"} errors (empty when valid)
    """
    errors = []

    if title is not None or require_title:
        if not title or not title.strip():
            errors.append({"field": "title", "message": "Title is required"})
        elif len(title.strip()) > TITLE_MAX_LENGTH:
            errors.append({
                "field": "title",
                "message": f"Title cannot exceed {TITLE_MAX_LENGTH} characters"
            })

    if description is not None and len(description.strip()) > DESCRIPTION_MAX_LENGTH:
        errors.append({
            "field": "description",
            "message": f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
        })

    if status is not None and status not in {s.value for s in TaskStatus}:
        errors.append({
            "field": "status",
            "message": "Status must be pending, in-progress, or completed"
        })

    if priority is not None and priority not in {p.value for p in TaskPriority}:
        errors.append({
            "field": "priority",
            "message": "Priority must be low, medium, or high"
        })

    return errors


def ensure_valid_task(task: Task):
    """Raise ValidationError if a task breaks any field rule."""
    errors = validate_task_fields(
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        require_title=True
    )
    if errors:
        raise ValidationError(errors)
