"""
Task management service.

Every operation takes the caller's Identity first and only ever touches
tasks owned by that identity.
"""

import logging
from typing import Optional, List, Dict, Iterable
from dataclasses import dataclass, field

from ..auth import Identity
from ..errors import ValidationError, TaskNotFoundError
from ..tasks import (
    Task,
    TaskStore,
    TaskStatus,
    TaskSort,
    PRIORITY_RANK,
    validate_task_fields,
    ensure_valid_task,
)
from ..tasks.models import utc_now

logger = logging.getLogger(__name__)

RECENT_TASKS_LIMIT = 5


@dataclass
class TaskQuery:
    """Filters for listing tasks. All filters are ANDed."""
    search: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    sort: str = TaskSort.NEWEST.value


@dataclass
class TaskStats:
    """Per-user task summary."""
    total: int
    by_status: Dict[str, int] = field(default_factory=dict)
    recent_tasks: List[Task] = field(default_factory=list)


def sort_tasks(tasks: List[Task], sort: str) -> List[Task]:
    """
    Order tasks by one of the supported sort keys.

    - newest: created_at descending (default)
    - oldest: created_at ascending
    - title: title ascending, case-insensitive
    - priority: high > medium > low, newest first within a level
    """
    if sort == TaskSort.OLDEST.value:
        return sorted(tasks, key=lambda t: t.created_at)
    if sort == TaskSort.TITLE.value:
        return sorted(tasks, key=lambda t: (t.title.casefold(), t.created_at))
    if sort == TaskSort.PRIORITY.value:
        newest_first = sorted(tasks, key=lambda t: t.created_at, reverse=True)
        return sorted(newest_first, key=lambda t: PRIORITY_RANK.get(t.priority, -1), reverse=True)
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)


class TaskService:
    """
    Service for owner-scoped task operations.

    Responsibilities:
    - List with search, filters and sort
    - Create / read / update / delete single tasks
    - Batch delete
    - Stats (counts by status, recent tasks)
    """

    def __init__(self, task_store: TaskStore):
        self.tasks = task_store

    def list_tasks(self, identity: Identity, query: Optional[TaskQuery] = None) -> List[Task]:
        """
        List the caller's tasks.

        Status and priority are plain equality filters, so a value no task
        can have yields an empty list.

        Raises:
            ValidationError: Unknown sort value
        """
        query = query or TaskQuery()
        if query.sort not in {s.value for s in TaskSort}:
            raise ValidationError.for_field("sort", "Sort must be newest, oldest, title, or priority")

        tasks = [
            t for t in self.tasks.list_for_owner(identity.user_id)
            if t.matches(query.search)
            and (query.status is None or t.status == query.status)
            and (query.priority is None or t.priority == query.priority)
        ]
        return sort_tasks(tasks, query.sort)

    def get_task(self, identity: Identity, task_id: str) -> Task:
        """
        Get one of the caller's tasks.

        Raises:
            TaskNotFoundError: Missing, or owned by someone else
        """
        task = self.tasks.get(identity.user_id, task_id)
        if task is None:
            raise TaskNotFoundError()
        return task

    def create_task(
        self,
        identity: Identity,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None
    ) -> Task:
        """
        Create a task owned by the caller.

        Raises:
            ValidationError: If any field breaks the task rules
        """
        task = Task.new(
            owner_id=identity.user_id,
            title=(title or "").strip(),
            description=description.strip() if description else None,
            status=status,
            priority=priority
        )
        ensure_valid_task(task)

        self.tasks.insert(task)
        logger.info(f"Task created: {task.task_id} by {identity.user_id}")
        return task

    def update_task(
        self,
        identity: Identity,
        task_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None
    ) -> Task:
        """
        Partially update one of the caller's tasks.

        Fields left as None are unchanged.

        Raises:
            ValidationError: If any provided field breaks the task rules
            TaskNotFoundError: Missing, or owned by someone else
        """
        errors = validate_task_fields(
            title=title,
            description=description,
            status=status,
            priority=priority
        )
        if errors:
            raise ValidationError(errors)

        task = self.get_task(identity, task_id)

        if title is not None:
            task.title = title.strip()
        if description is not None:
            task.description = description.strip()
        if status is not None:
            task.status = status
        if priority is not None:
            task.priority = priority
        task.updated_at = utc_now()

        ensure_valid_task(task)
        if not self.tasks.save(task):
            # Deleted between the read and the write
            raise TaskNotFoundError()

        logger.info(f"Task updated: {task.task_id} by {identity.user_id}")
        return task

    def delete_task(self, identity: Identity, task_id: str):
        """
        Delete one of the caller's tasks.

        Raises:
            TaskNotFoundError: Missing, or owned by someone else
        """
        if not self.tasks.delete(identity.user_id, task_id):
            raise TaskNotFoundError()
        logger.info(f"Task deleted: {task_id} by {identity.user_id}")

    def delete_tasks(self, identity: Identity, task_ids: Iterable[str]) -> int:
        """
        Delete several tasks; ids the caller doesn't own are skipped.

        Returns:
            Number of tasks actually deleted
        """
        deleted = self.tasks.delete_many(identity.user_id, task_ids)
        logger.info(f"Batch delete by {identity.user_id}: {deleted} task(s)")
        return deleted

    def get_stats(self, identity: Identity) -> TaskStats:
        """Counts per status plus the most recently created tasks."""
        tasks = self.tasks.list_for_owner(identity.user_id)

        by_status = {s.value: 0 for s in TaskStatus}
        for t in tasks:
            by_status[t.status] = by_status.get(t.status, 0) + 1

        return TaskStats(
            total=len(tasks),
            by_status=by_status,
            recent_tasks=sort_tasks(tasks, TaskSort.NEWEST.value)[:RECENT_TASKS_LIMIT]
        )
