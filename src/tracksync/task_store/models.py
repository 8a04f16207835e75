"""SQLAlchemy models for the Task Store."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class TaskStatus(StrEnum):
    """Task status enum. Synced tasks always start as todo."""

    TODO = "todo"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (SQLite stores no offset)."""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Project(Base):
    """Project model - a named task list."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, server_default=func.now()
    )

    tasks: Mapped[list[Task]] = relationship(
        "Task", back_populates="project", cascade="all, delete-orphan"
    )

    def __init__(self, name: str, id: str | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.name = name

    def __repr__(self) -> str:
        return f"<Project(id={self.id!r}, name={self.name!r})>"


class Task(Base):
    """Task model - a local task, optionally linked to the remote issue it came from."""

    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_project_source", "project_id", "source_issue_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    project_id: Mapped[str] = mapped_column(String(36), ForeignKey("projects.id"), nullable=False)
    source_issue_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, server_default=func.now()
    )

    project: Mapped[Project] = relationship("Project", back_populates="tasks")

    def __init__(
        self,
        project_id: str,
        title: str,
        id: str | None = None,
        source_issue_id: str | None = None,
        description: str | None = None,
        status: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.project_id = project_id
        self.title = title
        self.source_issue_id = source_issue_id
        self.description = description
        self.status = status if status is not None else TaskStatus.TODO.value

    @property
    def task_status(self) -> TaskStatus:
        """Get status as TaskStatus enum."""
        return TaskStatus(self.status)

    def __repr__(self) -> str:
        return (
            f"<Task(id={self.id!r}, source_issue_id={self.source_issue_id!r}, "
            f"title={self.title!r})>"
        )
