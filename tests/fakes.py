"""Test doubles and payload builders shared by the test suite."""

from __future__ import annotations

from typing import Any

from tracksync.youtrack import BoardRef, RemoteIssue

BOARD_URL = "https://track.example.com/youtrack/agiles/65-52/66-155467"
BOARD = BoardRef(
    base_url="https://track.example.com/youtrack/",
    agile_id="65-52",
    sprint_id="66-155467",
)
ISSUES_URL = "https://track.example.com/youtrack/api/agiles/65-52/sprints/66-155467/issues"


def api_issue(
    issue_id: str,
    summary: str,
    state: str | None = "Open",
    state_field: str = "State",
    description: str | None = None,
) -> dict[str, Any]:
    """An issue object as returned by the YouTrack REST API."""
    custom_fields: list[dict[str, Any]] = [
        {"name": "Priority", "value": {"name": "Normal"}},
    ]
    if state is not None:
        custom_fields.append({"name": state_field, "value": {"name": state}})
    return {
        "idReadable": issue_id,
        "summary": summary,
        "description": description,
        "customFields": custom_fields,
        "$type": "Issue",
    }


def make_issue(
    issue_id: str,
    title: str | None = None,
    state: str | None = "Open",
    description: str = "",
) -> RemoteIssue:
    """A RemoteIssue on the test board."""
    fields: dict[str, str | None] = {"Priority": "Normal"}
    if state is not None:
        fields["State"] = state
    return RemoteIssue(
        id=issue_id,
        title=title if title is not None else f"Issue {issue_id}",
        description=description,
        custom_fields=fields,
        board=BOARD,
    )


class FakeBoardClient:
    """Board client returning a fixed list of issues."""

    def __init__(self, issues: list[RemoteIssue], error: Exception | None = None) -> None:
        self.issues = issues
        self.error = error
        self.requested: list[BoardRef] = []
        self.closed = False

    def fetch_sprint_issues(self, board: BoardRef) -> list[RemoteIssue]:
        self.requested.append(board)
        if self.error is not None:
            raise self.error
        return list(self.issues)

    def close(self) -> None:
        self.closed = True
