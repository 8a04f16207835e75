"""Sync result assembly."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tracksync.sync.models import CREATED_TITLES_SAMPLE, SyncResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tracksync.youtrack import RemoteIssue


def assemble(
    open_issues: Sequence[RemoteIssue],
    created: int,
    skipped_existing: int,
    dry_run: bool,
    created_titles: Sequence[str],
    max_titles: int = CREATED_TITLES_SAMPLE,
) -> SyncResult:
    """Build the SyncResult of a run.

    ``created_titles`` is cut down to the first ``max_titles`` entries.
    """
    return SyncResult(
        open_issues_total=len(open_issues),
        created=created,
        skipped_existing=skipped_existing,
        dry_run=dry_run,
        created_titles=tuple(created_titles[: max(max_titles, 0)]),
    )
