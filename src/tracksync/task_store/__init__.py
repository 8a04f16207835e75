"""Task Store - Persistent storage for projects and their tasks."""

from tracksync.task_store.exceptions import (
    PersistenceError,
    ProjectNotFoundError,
    TaskStoreError,
)
from tracksync.task_store.models import Project, Task, TaskStatus
from tracksync.task_store.store import TaskStore

__all__ = [
    "PersistenceError",
    "Project",
    "ProjectNotFoundError",
    "Task",
    "TaskStatus",
    "TaskStore",
    "TaskStoreError",
]
