"""
Task storage.

Persists tasks to a JSON file keyed by task ID. Every read and write takes
the owner's user ID, so a task is only reachable through its owner.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Optional, List, Iterable

from .models import Task

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = Path(__file__).parent.parent.parent / "data" / "tasks.json"


class TaskStore:
    """
    JSON-based, owner-scoped task storage.

    Lookups match on (task_id, owner) jointly: a task that exists but
    belongs to someone else looks exactly like a missing one.
    """

    def __init__(self, file_path: Optional[Path] = None):
        """
        Initialize task store.

        Args:
            file_path: Path to tasks JSON file (default: data/tasks.json)
        """
        self.file_path = Path(file_path) if file_path else DEFAULT_TASKS_FILE
        self._lock = threading.Lock()
        self._ensure_file()

    def _ensure_file(self):
        """Ensure the storage file and directory exist."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self._save_all({})

    def _load_all(self) -> dict[str, dict]:
        """Load all tasks from file."""
        try:
            with open(self.file_path, "r") as f:
                return json.load(f)
        except FileNotFoundError:
            return {}

    def _save_all(self, tasks: dict[str, dict]):
        """Save all tasks to file."""
        with open(self.file_path, "w") as f:
            json.dump(tasks, f, indent=2, ensure_ascii=False)

    def list_for_owner(self, owner_id: str) -> List[Task]:
        """All tasks owned by owner_id, in insertion order."""
        return [
            Task.from_dict(data)
            for data in self._load_all().values()
            if data.get("user_id") == owner_id
        ]

    def get(self, owner_id: str, task_id: str) -> Optional[Task]:
        """
        Get a task by ID, scoped to its owner.

        Returns:
            Task if it exists and belongs to owner_id, None otherwise
        """
        data = self._load_all().get(task_id)
        if data is None or data.get("user_id") != owner_id:
            return None
        return Task.from_dict(data)

    def insert(self, task: Task) -> Task:
        """
        Store a new task.

        Raises:
            ValueError: If the task ID is already taken
        """
        with self._lock:
            tasks = self._load_all()
            if task.task_id in tasks:
                raise ValueError(f"Task {task.task_id} already exists")

            tasks[task.task_id] = task.to_dict()
            self._save_all(tasks)

        logger.debug(f"Inserted task {task.task_id} for {task.user_id}")
        return task

    def save(self, task: Task) -> bool:
        """
        Overwrite an existing task owned by task.user_id.

        Returns:
            True if saved, False if no such task exists for that owner
        """
        with self._lock:
            tasks = self._load_all()
            current = tasks.get(task.task_id)
            if current is None or current.get("user_id") != task.user_id:
                return False

            tasks[task.task_id] = task.to_dict()
            self._save_all(tasks)

        return True

    def delete(self, owner_id: str, task_id: str) -> bool:
        """
        Delete one task.

        Returns:
            True if deleted, False if not found for that owner
        """
        with self._lock:
            tasks = self._load_all()
            current = tasks.get(task_id)
            if current is None or current.get("user_id") != owner_id:
                return False

            del tasks[task_id]
            self._save_all(tasks)

        return True

    def delete_many(self, owner_id: str, task_ids: Iterable[str]) -> int:
        """
        Delete every listed task that owner_id owns; others are ignored.

        Returns:
            Number of tasks actually deleted
        """
        with self._lock:
            tasks = self._load_all()
            doomed = {
                task_id for task_id in task_ids
                if tasks.get(task_id, {}).get("user_id") == owner_id
            }
            for task_id in doomed:
                del tasks[task_id]

            if doomed:
                self._save_all(tasks)

        return len(doomed)

    def count_for_owner(self, owner_id: str) -> int:
        return sum(1 for data in self._load_all().values() if data.get("user_id") == owner_id)
