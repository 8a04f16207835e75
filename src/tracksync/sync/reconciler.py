"""Reconciler - Creates local tasks for open issues that have none yet."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from tracksync.sync.models import ReconcileOutcome, TaskPreview
from tracksync.task_store import PersistenceError, TaskStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Set

    from tracksync.task_store import Task
    from tracksync.youtrack import RemoteIssue

logger = logging.getLogger(__name__)


class TaskWriter(Protocol):
    """Write side of the task store used by the reconciler."""

    def create_task(
        self,
        project_id: str,
        title: str,
        source_issue_id: str | None = None,
        description: str | None = None,
        status: TaskStatus = TaskStatus.TODO,
    ) -> Task: ...


def task_description(issue: RemoteIssue) -> str | None:
    """Description for a task created from an issue: a link back, then the issue body."""
    parts = []
    if issue.board is not None:
        parts.append(f"YouTrack: {issue.board.issue_url(issue.id)}")
    if issue.description.strip():
        parts.append(issue.description)
    return "\n\n".join(parts) or None


class Reconciler:
    """Creates a task for every open issue not yet linked to one.

    Tasks are committed one at a time. A failed commit aborts the run, and
    tasks committed before it stay in place; re-running is safe because
    issues already linked to a task are skipped.
    """

    def __init__(self, store: TaskWriter) -> None:
        """Initialize the Reconciler.

        Args:
            store: Task store receiving new tasks.
        """
        self.store = store

    def reconcile(
        self,
        project_id: str,
        open_issues: Iterable[RemoteIssue],
        index: Set[str],
        dry_run: bool = False,
    ) -> ReconcileOutcome:
        """Create (or preview) tasks for open issues missing from the index.

        Args:
            project_id: Project receiving the tasks.
            open_issues: Filtered open issues, in board order.
            index: Source issue IDs that already have a task in the project.
            dry_run: Only record what would be created; write nothing.

        Returns:
            ReconcileOutcome with created previews and the skipped count.

        Raises:
            PersistenceError: If a task fails to commit (never in dry-run).
        """
        outcome = ReconcileOutcome()
        # Issues handled earlier in this run count as existing too
        seen: set[str] = set()

        for issue in open_issues:
            if issue.id in index or issue.id in seen:
                outcome.skipped_existing += 1
                logger.debug("Skipping %s: task already exists", issue.id)
                continue
            seen.add(issue.id)

            description = task_description(issue)
            if dry_run:
                outcome.created.append(
                    TaskPreview(
                        source_issue_id=issue.id,
                        title=issue.title,
                        description=description,
                    )
                )
                continue

            try:
                task = self.store.create_task(
                    project_id=project_id,
                    title=issue.title,
                    source_issue_id=issue.id,
                    description=description,
                    status=TaskStatus.TODO,
                )
            except PersistenceError:
                logger.error(
                    "Failed to create task for %s after %d task(s) were created",
                    issue.id,
                    len(outcome.created),
                )
                raise

            logger.info("Created task %s for %s", task.id, issue.id)
            outcome.created.append(
                TaskPreview(
                    source_issue_id=issue.id,
                    title=task.title,
                    description=description,
                    task_id=task.id,
                )
            )

        return outcome
