"""Data models for the open-issue sync."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from tracksync.youtrack import (
    BoardRef,
    InvalidBoardReferenceError,
    normalize_base_url,
    parse_board_url,
)

DEFAULT_STATE_FIELD = "State"
DEFAULT_OPEN_VALUE = "Open"

# created_titles is a preview for display; the full count is in `created`
CREATED_TITLES_SAMPLE = 3


@dataclass
class SyncRequest:
    """Parameters of one sync run.

    The sprint is addressed either by ``board_url`` or by the
    ``youtrack_base_url`` + ``agile_id`` + ``sprint_id`` triple.
    """

    project_id: str
    token: str = field(repr=False)
    board_url: str | None = None
    youtrack_base_url: str | None = None
    agile_id: str | None = None
    sprint_id: str | None = None
    state_field: str = DEFAULT_STATE_FIELD
    open_value: str = DEFAULT_OPEN_VALUE
    dry_run: bool = False

    def board_ref(self) -> BoardRef:
        """Resolve the sprint this request targets.

        Raises:
            InvalidBoardReferenceError: If neither addressing form is complete.
        """
        if self.board_url:
            return parse_board_url(self.board_url)

        missing = [
            name
            for name in ("youtrack_base_url", "agile_id", "sprint_id")
            if not getattr(self, name)
        ]
        if missing:
            raise InvalidBoardReferenceError(
                "Provide board_url, or youtrack_base_url with agile_id and sprint_id "
                f"(missing: {', '.join(missing)})"
            )
        return BoardRef(
            base_url=normalize_base_url(self.youtrack_base_url or ""),
            agile_id=self.agile_id or "",
            sprint_id=self.sprint_id or "",
        )


@dataclass(frozen=True)
class TaskPreview:
    """A task the reconciler created, or would create in dry-run mode."""

    source_issue_id: str
    title: str
    description: str | None = None
    task_id: str | None = None  # None in dry-run mode


@dataclass
class ReconcileOutcome:
    """What the reconciler did with the open issues of one run."""

    created: list[TaskPreview] = field(default_factory=list)
    skipped_existing: int = 0


@dataclass(frozen=True)
class SyncResult:
    """Result of a sync run.

    Attributes:
        open_issues_total: Issues on the sprint in the open state.
        created: Tasks created (or that would be created in dry-run).
        skipped_existing: Open issues that already had a task.
        dry_run: Whether the run was a preview.
        created_titles: Titles of the first created tasks, capped for display.
    """

    open_issues_total: int
    created: int
    skipped_existing: int
    dry_run: bool
    created_titles: tuple[str, ...] = ()


class RunStatus(StrEnum):
    """Lifecycle of a sync run as seen by its caller."""

    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class SyncDone:
    """Terminal outcome of a successful run."""

    result: SyncResult

    @property
    def status(self) -> RunStatus:
        return RunStatus.DONE


@dataclass(frozen=True)
class SyncFailed:
    """Terminal outcome of a failed run."""

    message: str

    @property
    def status(self) -> RunStatus:
        return RunStatus.ERROR


SyncOutcome = SyncDone | SyncFailed
