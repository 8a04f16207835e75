"""Unit tests for project routes."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tracksync.api import create_app
from tracksync.api.dependencies import get_task_store
from tracksync.config import Settings
from tracksync.task_store import TaskStore


@pytest.fixture
def app(store: TaskStore) -> FastAPI:
    """App using the in-memory store fixture."""
    app = create_app(settings=Settings(db_path=":memory:"))

    def override_get_task_store():
        yield store

    app.dependency_overrides[get_task_store] = override_get_task_store
    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.mark.unit
class TestProjects:
    """Tests for /projects."""

    def test_list_projects_empty(self, client: TestClient) -> None:
        response = client.get("/api/v1/projects")

        assert response.status_code == 200
        assert response.json() == {"data": [], "error": None}

    def test_create_project(self, client: TestClient, store: TaskStore) -> None:
        response = client.post("/api/v1/projects", json={"name": "Backend"})

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Backend"
        assert store.get_project(data["id"]).name == "Backend"

    def test_create_project_empty_name(self, client: TestClient) -> None:
        response = client.post("/api/v1/projects", json={"name": ""})

        assert response.status_code == 422

    def test_get_project(self, client: TestClient, project_id: str) -> None:
        response = client.get(f"/api/v1/projects/{project_id}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == project_id

    def test_get_project_not_found(self, client: TestClient) -> None:
        response = client.get("/api/v1/projects/nonexistent")

        assert response.status_code == 404
        assert response.json()["data"] is None


@pytest.mark.unit
class TestTasks:
    """Tests for /projects/{project_id}/tasks."""

    def test_list_tasks(self, client: TestClient, store: TaskStore, project_id: str) -> None:
        store.create_task(project_id=project_id, title="Fix login", source_issue_id="PRJ-1")
        store.create_task(project_id=project_id, title="Manual")

        response = client.get(f"/api/v1/projects/{project_id}/tasks")

        assert response.status_code == 200
        tasks = response.json()["data"]
        assert [t["title"] for t in tasks] == ["Fix login", "Manual"]
        assert tasks[0]["source_issue_id"] == "PRJ-1"
        assert tasks[0]["status"] == "todo"
        assert tasks[1]["source_issue_id"] is None

    def test_list_tasks_unknown_project(self, client: TestClient) -> None:
        response = client.get("/api/v1/projects/nonexistent/tasks")

        assert response.status_code == 404
