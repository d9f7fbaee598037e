"""Google Tasks service for tool-calling agents.

Wraps the Google Tasks API so every operation returns a uniform text
result that an agent can consume without exception handling.

Usage:
    from workspace_tasks.google import TokenFileAuth
    from workspace_tasks.tasks import TasksService

    service = TasksService(TokenFileAuth())

    # List task lists
    lists = await service.list_task_lists()

    # Create a task in the default list
    result = await service.create_task(
        title="Review PR",
        notes="Check the workspace-tasks changes",
        due="2026-01-25T00:00:00.000Z",
    )

    # Mark it done (only "status" is sent)
    await service.update_task(task_id="abc123", status="completed")

Results look like:
    {"content": [{"type": "text", "text": "<json>"}]}

where <json> is the API response, or {"error": "<message>"} on failure.
"""

from __future__ import annotations

from workspace_tasks.tasks.service import DEFAULT_TASKLIST, TasksService
from workspace_tasks.tasks.tools import TASKS_TOOLS, ToolSpec, call_tool

__all__ = ["TasksService", "DEFAULT_TASKLIST", "TASKS_TOOLS", "ToolSpec", "call_tool"]
