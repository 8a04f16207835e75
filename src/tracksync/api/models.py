"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from tracksync.sync import DEFAULT_OPEN_VALUE, DEFAULT_STATE_FIELD, SyncRequest

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Project models


class ProjectCreate(BaseModel):
    """Request model for creating a project."""

    name: str = Field(..., min_length=1, max_length=255)


class ProjectResponse(BaseModel):
    """Response model for a project."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime


def project_to_response(project: Any) -> ProjectResponse:
    """Convert a Project model to ProjectResponse."""
    return ProjectResponse.model_validate(project)


# Task models


class TaskResponse(BaseModel):
    """Response model for a task."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    source_issue_id: str | None
    title: str
    description: str | None
    status: str
    created_at: datetime


def task_to_response(task: Any) -> TaskResponse:
    """Convert a Task model to TaskResponse."""
    return TaskResponse.model_validate(task)


# YouTrack open-sync models


class YouTrackOpenSyncRequest(BaseModel):
    """Request model for syncing open YouTrack sprint issues into a project.

    Either board_url, or youtrack_base_url with agile_id and sprint_id, must be given.
    """

    project_id: str = Field(..., min_length=1)
    # e.g. https://host/youtrack/agiles/{agileId}/{sprintId}
    board_url: str | None = None
    youtrack_base_url: str | None = None
    agile_id: str | None = None
    sprint_id: str | None = None
    youtrack_token: str = ""
    state_field: str = Field(default=DEFAULT_STATE_FIELD, min_length=1)
    open_value: str = Field(default=DEFAULT_OPEN_VALUE, min_length=1)
    dry_run: bool = False

    def to_sync_request(self) -> SyncRequest:
        """Convert to the sync layer's request."""
        return SyncRequest(
            project_id=self.project_id,
            token=self.youtrack_token,
            board_url=self.board_url,
            youtrack_base_url=self.youtrack_base_url,
            agile_id=self.agile_id,
            sprint_id=self.sprint_id,
            state_field=self.state_field,
            open_value=self.open_value,
            dry_run=self.dry_run,
        )


class YouTrackOpenSyncResponse(BaseModel):
    """Response model for an open-issue sync."""

    model_config = ConfigDict(from_attributes=True)

    open_issues_total: int
    created: int
    skipped_existing: int
    dry_run: bool
    created_titles: list[str]


def sync_result_to_response(result: Any) -> YouTrackOpenSyncResponse:
    """Convert a SyncResult to YouTrackOpenSyncResponse."""
    return YouTrackOpenSyncResponse.model_validate(result)
