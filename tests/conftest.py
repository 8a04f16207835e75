"""Shared pytest fixtures and configuration."""

import pytest

from tracksync.task_store import TaskStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture
def store():
    """In-memory TaskStore."""
    s = TaskStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def project_id(store: TaskStore) -> str:
    """ID of an empty project in the store."""
    return store.create_project(name="Sprint board").id
