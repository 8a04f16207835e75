"""Custom exceptions for the Task Store."""


class TaskStoreError(Exception):
    """Base exception for Task Store errors."""


class ProjectNotFoundError(TaskStoreError):
    """Project with given ID does not exist."""


class PersistenceError(TaskStoreError):
    """A task could not be committed to the database."""
