"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from tracksync.sync import SyncService
from tracksync.task_store import TaskStore

# Global TaskStore instance (initialized on app startup)
_task_store: TaskStore | None = None


def init_task_store(db_path: str = "tracksync.db") -> TaskStore:
    """Initialize the global TaskStore instance."""
    global _task_store  # noqa: PLW0603
    _task_store = TaskStore(db_path)
    return _task_store


def close_task_store() -> None:
    """Close the global TaskStore instance."""
    global _task_store  # noqa: PLW0603
    if _task_store is not None:
        _task_store.close()
        _task_store = None


def get_task_store() -> Generator[TaskStore, None, None]:
    """Dependency that provides the TaskStore instance."""
    if _task_store is None:
        raise RuntimeError("TaskStore not initialized. Call init_task_store() first.")
    yield _task_store


TaskStoreDep = Annotated[TaskStore, Depends(get_task_store)]

# Global SyncService instance (initialized on app startup)
_sync_service: SyncService | None = None


def init_sync_service(service: SyncService) -> None:
    """Initialize the global SyncService instance."""
    global _sync_service  # noqa: PLW0603
    _sync_service = service


def close_sync_service() -> None:
    """Close the global SyncService instance."""
    global _sync_service  # noqa: PLW0603
    _sync_service = None


def get_sync_service() -> Generator[SyncService, None, None]:
    """Dependency that provides the SyncService instance."""
    if _sync_service is None:
        raise RuntimeError("SyncService not initialized. Call init_sync_service() first.")
    yield _sync_service


SyncServiceDep = Annotated[SyncService, Depends(get_sync_service)]
