"""Integration tests for the open-sync API with a real database."""

import functools

import httpx
import pytest
from fakes import BOARD_URL, ISSUES_URL, api_issue
from fastapi.testclient import TestClient

from tracksync.api import create_app
from tracksync.api.dependencies import get_sync_service
from tracksync.sync import SyncService
from tracksync.task_store import TaskStore
from tracksync.youtrack import YouTrackClient

ISSUES = [
    api_issue("PRJ-1", "Fix login"),
    api_issue("PRJ-2", "Add logout"),
    api_issue("PRJ-3", "Rate limit"),
    api_issue("PRJ-4", "Audit log"),
    api_issue("PRJ-5", "Dark mode"),
    api_issue("PRJ-6", "Shipped", state="Done"),
]


def _youtrack(request: httpx.Request) -> httpx.Response:
    if request.headers.get("Authorization") != "Bearer perm:good":
        return httpx.Response(401, json={"error": "Unauthorized"})
    assert f"{request.url.scheme}://{request.url.host}{request.url.path}" == ISSUES_URL
    return httpx.Response(200, json=ISSUES)


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "tracksync.db")


@pytest.fixture
def store(db_path: str):
    """A second handle on the app's database for direct checks."""
    s = TaskStore(db_path)
    yield s
    s.close()


@pytest.fixture
def client(db_path: str, store: TaskStore):
    app = create_app(db_path)
    service = SyncService(
        store=store,
        client_factory=functools.partial(
            YouTrackClient, transport=httpx.MockTransport(_youtrack)
        ),
    )

    def override_get_sync_service():
        yield service

    app.dependency_overrides[get_sync_service] = override_get_sync_service
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


def _sync(client: TestClient, project_id: str, **extra) -> httpx.Response:
    body = {"project_id": project_id, "board_url": BOARD_URL, "youtrack_token": "perm:good"}
    body.update(extra)
    return client.post("/api/v1/integrations/youtrack/open-sync", json=body)


@pytest.mark.integration
class TestOpenSyncApi:
    """End-to-end API flow: create project, preview, sync, re-sync."""

    def test_preview_then_sync_then_resync(self, client: TestClient, store: TaskStore) -> None:
        project = client.post("/api/v1/projects", json={"name": "Team board"})
        assert project.status_code == 201
        project_id = project.json()["data"]["id"]

        preview = _sync(client, project_id, dry_run=True).json()["data"]
        assert preview == {
            "open_issues_total": 5,
            "created": 5,
            "skipped_existing": 0,
            "dry_run": True,
            "created_titles": ["Fix login", "Add logout", "Rate limit"],
        }
        assert store.count_tasks(project_id) == 0

        synced = _sync(client, project_id).json()["data"]
        assert synced["created"] == 5
        assert store.count_tasks(project_id) == 5

        resynced = _sync(client, project_id).json()["data"]
        assert resynced["created"] == 0
        assert resynced["skipped_existing"] == 5

        tasks = client.get(f"/api/v1/projects/{project_id}/tasks").json()["data"]
        assert sorted(t["source_issue_id"] for t in tasks) == [f"PRJ-{n}" for n in range(1, 6)]

    def test_invalid_token_returns_error_only(self, client: TestClient, store: TaskStore) -> None:
        project_id = client.post("/api/v1/projects", json={"name": "Team board"}).json()["data"][
            "id"
        ]

        response = _sync(client, project_id, youtrack_token="perm:bad")

        assert response.status_code == 401
        assert response.json()["data"] is None
        assert response.json()["error"]
        assert store.count_tasks(project_id) == 0
