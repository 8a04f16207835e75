"""Existing-task index - source issue IDs already synced into a project."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable


class SourcedTask(Protocol):
    source_issue_id: str | None


class SourceIdReader(Protocol):
    """Read side of the task store used to build the index."""

    def list_source_issue_ids(self, project_id: str) -> list[str]: ...


def build_index(tasks: Iterable[SourcedTask]) -> frozenset[str]:
    """Set of source issue IDs; tasks with no source are ignored."""
    return frozenset(t.source_issue_id for t in tasks if t.source_issue_id is not None)


def load_index(store: SourceIdReader, project_id: str) -> frozenset[str]:
    """Read the index for one project from the store.

    Always reads the store; nothing is cached between runs.

    Raises:
        ProjectNotFoundError: If the project doesn't exist
    """
    return frozenset(store.list_source_issue_ids(project_id))
