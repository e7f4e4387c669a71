"""
Task records and their owner-scoped storage.
"""

from .models import (
    Task,
    TaskStatus,
    TaskPriority,
    TaskSort,
    PRIORITY_RANK,
    TITLE_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    validate_task_fields,
    ensure_valid_task,
)
from .store import TaskStore

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
    "TaskSort",
    "PRIORITY_RANK",
    "TITLE_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "validate_task_fields",
    "ensure_valid_task",
    "TaskStore",
]
