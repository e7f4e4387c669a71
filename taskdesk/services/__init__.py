"""
Services layer for TaskDesk.

Business logic shared by the HTTP API and the maintenance scripts.
"""

from .user_auth_service import UserAuthService, AuthResult
from .profile_service import ProfileService
from .task_service import TaskService, TaskQuery, TaskStats, sort_tasks

__all__ = [
    # Services
    "UserAuthService",
    "ProfileService",
    "TaskService",
    # Data classes
    "AuthResult",
    "TaskQuery",
    "TaskStats",
    "sort_tasks",
]
