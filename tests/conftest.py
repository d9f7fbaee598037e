"""Shared test fixtures for workspace-tasks tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from workspace_tasks.config import RequestOptions
from workspace_tasks.tasks import TasksService


@pytest.fixture
def auth_manager():
    """Auth manager handing out dummy credentials."""
    manager = MagicMock()
    manager.get_authenticated_client = AsyncMock(return_value=MagicMock(name="credentials"))
    return manager


@pytest.fixture
def tasks_api():
    """Mock Tasks API resource returned by googleapiclient's build()."""
    return MagicMock(name="tasks_api")


@pytest.fixture
def mock_build(tasks_api):
    """Patch client construction so no HTTP or discovery happens."""
    with (
        patch("workspace_tasks.tasks.service.build", return_value=tasks_api) as build,
        patch("workspace_tasks.tasks.service.AuthorizedHttp"),
    ):
        yield build


@pytest.fixture
def service(auth_manager, mock_build):
    """TasksService wired to the mocked API."""
    return TasksService(auth_manager, RequestOptions(timeout=5.0, num_retries=0))
