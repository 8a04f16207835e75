"""Integration tests: YouTrackClient over a mock transport into a file-backed TaskStore."""

import functools
import json

import httpx
import pytest
from fakes import BOARD_URL, ISSUES_URL, api_issue

from tracksync.sync import SyncDone, SyncFailed, SyncRequest, SyncRun, SyncService
from tracksync.task_store import TaskStore
from tracksync.youtrack import YouTrackClient

TOKEN = "perm:integration-token"


class FakeYouTrack:
    """In-process YouTrack sprint issues endpoint."""

    def __init__(self, issues: list[dict]) -> None:
        self.issues = issues
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("Authorization") != f"Bearer {TOKEN}":
            return httpx.Response(401, json={"error": "Unauthorized"})
        url = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        if url != ISSUES_URL:
            return httpx.Response(404, json={"error": "Not Found"})
        skip = int(request.url.params["$skip"])
        top = int(request.url.params["$top"])
        page = self.issues[skip : skip + top]
        return httpx.Response(200, content=json.dumps(page).encode())


@pytest.fixture
def db_store(tmp_path):
    """TaskStore on a temporary SQLite file."""
    s = TaskStore(str(tmp_path / "tracksync.db"))
    yield s
    s.close()


def _service(store: TaskStore, youtrack: FakeYouTrack) -> SyncService:
    transport = httpx.MockTransport(youtrack.handler)
    return SyncService(
        store=store,
        client_factory=functools.partial(YouTrackClient, transport=transport),
    )


@pytest.mark.integration
class TestSyncFlow:
    """Full runs against a fake YouTrack."""

    def test_sync_creates_then_skips(self, db_store: TaskStore) -> None:
        project_id = db_store.create_project(name="Team board").id
        youtrack = FakeYouTrack(
            [
                api_issue("PRJ-1", "Fix login", description="Users get logged out"),
                api_issue("PRJ-2", "Add logout", state="In Progress"),
                api_issue("PRJ-3", "Rate limit"),
                api_issue("PRJ-4", "No state", state=None),
            ]
        )
        service = _service(db_store, youtrack)
        request = SyncRequest(project_id=project_id, token=TOKEN, board_url=BOARD_URL)

        first = SyncRun(service, request).execute()
        second = SyncRun(service, request).execute()

        assert isinstance(first, SyncDone)
        assert (first.result.open_issues_total, first.result.created) == (2, 2)
        assert isinstance(second, SyncDone)
        assert (second.result.created, second.result.skipped_existing) == (0, 2)

        tasks = db_store.list_tasks(project_id)
        assert [t.source_issue_id for t in tasks] == ["PRJ-1", "PRJ-3"]
        assert tasks[0].description == (
            "YouTrack: https://track.example.com/youtrack/issue/PRJ-1\n\nUsers get logged out"
        )

    def test_paged_sprint(self, db_store: TaskStore) -> None:
        project_id = db_store.create_project(name="Big sprint").id
        youtrack = FakeYouTrack([api_issue(f"PRJ-{n}", f"Issue {n}") for n in range(230)])

        outcome = SyncRun(
            _service(db_store, youtrack),
            SyncRequest(project_id=project_id, token=TOKEN, board_url=BOARD_URL, dry_run=True),
        ).execute()

        assert isinstance(outcome, SyncDone)
        assert outcome.result.open_issues_total == 230
        assert outcome.result.created_titles == ("Issue 0", "Issue 1", "Issue 2")
        assert len(youtrack.requests) == 3
        assert db_store.count_tasks() == 0

    def test_invalid_token(self, db_store: TaskStore) -> None:
        project_id = db_store.create_project(name="Team board").id
        youtrack = FakeYouTrack([api_issue("PRJ-1", "Fix login")])

        outcome = SyncRun(
            _service(db_store, youtrack),
            SyncRequest(project_id=project_id, token="perm:wrong", board_url=BOARD_URL),
        ).execute()

        assert isinstance(outcome, SyncFailed)
        assert "rejected the token" in outcome.message
        assert db_store.count_tasks() == 0

    def test_unknown_sprint(self, db_store: TaskStore) -> None:
        project_id = db_store.create_project(name="Team board").id
        youtrack = FakeYouTrack([])

        outcome = SyncRun(
            _service(db_store, youtrack),
            SyncRequest(
                project_id=project_id,
                token=TOKEN,
                board_url="https://track.example.com/youtrack/agiles/65-52/99-1",
            ),
        ).execute()

        assert isinstance(outcome, SyncFailed)
        assert "99-1" in outcome.message
