"""Tests for the Tasks tool registry."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from workspace_tasks.tasks import TASKS_TOOLS, call_tool
from workspace_tasks.tasks.service import text_result


def payload(result):
    return json.loads(result["content"][0]["text"])


@pytest.fixture
def fake_service():
    """Service double with async operations."""
    service = MagicMock()
    for name in (
        "list_task_lists",
        "list_tasks",
        "create_task",
        "update_task",
        "delete_task",
        "get_task",
    ):
        setattr(service, name, AsyncMock(return_value=text_result({"ok": name})))
    return service


class TestToolDefinitions:
    """Test tool metadata."""

    def test_one_tool_per_operation(self):
        """Should expose every service operation."""
        assert {tool.method for tool in TASKS_TOOLS} == {
            "list_task_lists",
            "list_tasks",
            "create_task",
            "update_task",
            "delete_task",
            "get_task",
        }

    def test_schema_arguments_match(self):
        """Should describe every argument the tool accepts."""
        for tool in TASKS_TOOLS:
            assert set(tool.properties) == set(tool.arguments)
            assert set(tool.required) <= set(tool.properties)

    def test_to_dict(self):
        """Should render MCP tool definitions."""
        create = next(tool for tool in TASKS_TOOLS if tool.name == "tasks.create")
        definition = create.to_dict()
        assert definition["name"] == "tasks.create"
        assert definition["inputSchema"]["type"] == "object"
        assert definition["inputSchema"]["required"] == ["title"]
        assert "tasklistId" in definition["inputSchema"]["properties"]


class TestCallTool:
    """Test dispatching tool calls."""

    @pytest.mark.asyncio
    async def test_maps_camel_case_arguments(self, fake_service):
        """Should pass API-style arguments as service keywords."""
        result = await call_tool(
            fake_service,
            "tasks.list",
            {"tasklistId": "work", "showCompleted": True, "dueMax": "2026-01-31T00:00:00Z"},
        )

        fake_service.list_tasks.assert_awaited_once_with(
            tasklist_id="work", show_completed=True, due_max="2026-01-31T00:00:00Z"
        )
        assert payload(result) == {"ok": "list_tasks"}

    @pytest.mark.asyncio
    async def test_no_arguments(self, fake_service):
        """Should accept a missing argument dict."""
        await call_tool(fake_service, "tasks.listLists")
        fake_service.list_task_lists.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_update(self, fake_service):
        """Should forward only the given update fields."""
        await call_tool(fake_service, "tasks.update", {"taskId": "task1", "status": "completed"})
        fake_service.update_task.assert_awaited_once_with(task_id="task1", status="completed")

    @pytest.mark.asyncio
    async def test_unknown_tool(self, fake_service):
        """Should return an error for unknown tools."""
        result = await call_tool(fake_service, "tasks.archive", {})
        assert payload(result) == {"error": "Unknown tool: tasks.archive"}

    @pytest.mark.asyncio
    async def test_missing_required(self, fake_service):
        """Should return an error when a required argument is missing."""
        result = await call_tool(fake_service, "tasks.delete", {"tasklistId": "work"})

        assert payload(result) == {"error": "Missing required arguments for tasks.delete: taskId"}
        fake_service.delete_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_argument(self, fake_service):
        """Should return an error for unexpected arguments."""
        result = await call_tool(fake_service, "tasks.get", {"taskId": "t", "task_id": "t"})

        assert payload(result) == {"error": "Unknown arguments for tasks.get: task_id"}
        fake_service.get_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_through_real_service(self, service, tasks_api):
        """Should reach the API with the mapped arguments."""
        tasks_api.tasks.return_value.insert.return_value.execute.return_value = {"id": "new"}

        result = await call_tool(
            service, "tasks.create", {"title": "New Task", "tasklistId": "work"}
        )

        tasks_api.tasks.return_value.insert.assert_called_once_with(
            tasklist="work",
            body={"title": "New Task", "notes": None, "due": None, "status": None},
        )
        assert payload(result) == {"id": "new"}
