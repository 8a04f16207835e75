"""SyncService - Runs one open-issue sync from a YouTrack sprint into a project."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from tracksync.logging import sanitize_for_log
from tracksync.sync.filters import filter_open
from tracksync.sync.index import load_index
from tracksync.sync.models import (
    CREATED_TITLES_SAMPLE,
    RunStatus,
    SyncDone,
    SyncFailed,
)
from tracksync.sync.reconciler import Reconciler
from tracksync.sync.results import assemble
from tracksync.task_store import TaskStoreError
from tracksync.youtrack import YouTrackClient, YouTrackError

if TYPE_CHECKING:
    from tracksync.sync.models import SyncOutcome, SyncRequest, SyncResult
    from tracksync.task_store import TaskStore
    from tracksync.youtrack import BoardRef, RemoteIssue

logger = logging.getLogger(__name__)


class BoardClient(Protocol):
    """Interface of the board client used by a run."""

    def fetch_sprint_issues(self, board: BoardRef) -> list[RemoteIssue]: ...

    def close(self) -> None: ...


ClientFactory = Callable[[str], BoardClient]


class SyncService:
    """Synchronizes open sprint issues into a project's task list.

    Each call to sync() is one sequential run:
    fetch -> filter -> index -> reconcile -> assemble.
    """

    def __init__(
        self,
        store: TaskStore,
        client_factory: ClientFactory = YouTrackClient,
        max_titles: int = CREATED_TITLES_SAMPLE,
    ) -> None:
        """Initialize the SyncService.

        Args:
            store: Task store holding projects and tasks.
            client_factory: Builds a board client from a token. Raises
                MissingCredentialError for an empty token.
            max_titles: Cap on created_titles in results.
        """
        self.store = store
        self.client_factory = client_factory
        self.max_titles = max_titles
        self.reconciler = Reconciler(store)

    def sync(self, request: SyncRequest) -> SyncResult:
        """Run one sync.

        Args:
            request: Run parameters.

        Returns:
            SyncResult of the run.

        Raises:
            YouTrackError: Bad board reference, missing or rejected token,
                or YouTrack unavailable.
            ProjectNotFoundError: If the project doesn't exist.
            PersistenceError: If a task fails to commit. Tasks created
                before the failure remain.
        """
        board = request.board_ref()
        self.store.get_project(request.project_id)

        logger.info(
            "Syncing agile %s sprint %s into project %s (dry_run=%s)",
            board.agile_id,
            board.sprint_id,
            request.project_id,
            request.dry_run,
        )

        client = self.client_factory(request.token)
        try:
            issues = client.fetch_sprint_issues(board)
        finally:
            client.close()

        open_issues = filter_open(issues, request.state_field, request.open_value)
        logger.info(
            "%d of %d issue(s) have %s=%s",
            len(open_issues),
            len(issues),
            request.state_field,
            request.open_value,
        )

        index = load_index(self.store, request.project_id)
        outcome = self.reconciler.reconcile(
            request.project_id, open_issues, index, dry_run=request.dry_run
        )

        result = assemble(
            open_issues,
            created=len(outcome.created),
            skipped_existing=outcome.skipped_existing,
            dry_run=request.dry_run,
            created_titles=[p.title for p in outcome.created],
            max_titles=self.max_titles,
        )
        logger.info(
            "Sync complete: open %d, created %d, skipped %d, dry_run %s",
            result.open_issues_total,
            result.created,
            result.skipped_existing,
            result.dry_run,
        )
        return result


class SyncRun:
    """A single sync run with an observable status.

    Moves idle -> running -> done | error. The outcome is either SyncDone
    carrying the result or SyncFailed carrying one message; never both.
    """

    def __init__(self, service: SyncService, request: SyncRequest) -> None:
        self.service = service
        self.request = request
        self.status = RunStatus.IDLE
        self.outcome: SyncOutcome | None = None

    def execute(self) -> SyncOutcome:
        """Execute the run. A run can only be executed once.

        Raises:
            RuntimeError: If the run was already executed.
        """
        if self.status is not RunStatus.IDLE:
            raise RuntimeError(f"Sync run already {self.status}")

        self.status = RunStatus.RUNNING
        try:
            result = self.service.sync(self.request)
        except (YouTrackError, TaskStoreError) as e:
            message = sanitize_for_log(str(e))
            logger.error("Sync failed for project %s: %s", self.request.project_id, message)
            self.outcome = SyncFailed(message=message)
        except Exception:
            self.status = RunStatus.ERROR
            raise
        else:
            self.outcome = SyncDone(result=result)

        self.status = self.outcome.status
        return self.outcome
