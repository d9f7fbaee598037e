"""Tool definitions exposing TasksService to an MCP-style agent.

Argument names follow the Tasks API spelling (camelCase) so agents can
pass values straight through; ``call_tool`` maps them onto the service
method keywords.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from workspace_tasks.tasks.service import TasksService, error_result

_TASKLIST_ID = {
    "type": "string",
    "description": "Task list ID. Defaults to the user's first task list.",
}
_TASK_ID = {"type": "string", "description": "ID of the task"}
_DUE = {"type": "string", "description": "Due date as an RFC 3339 timestamp"}
_STATUS = {"type": "string", "enum": ["needsAction", "completed"], "description": "Task status"}


@dataclass(frozen=True)
class ToolSpec:
    """A callable tool backed by a TasksService method."""

    name: str
    description: str
    method: str
    properties: dict[str, dict[str, Any]] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    # camelCase argument name -> service keyword
    arguments: dict[str, str] = field(default_factory=dict)

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": self.properties,
            "required": list(self.required),
        }

    def to_dict(self) -> dict[str, Any]:
        """Tool definition in MCP ``tools/list`` format."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


TASKS_TOOLS = [
    ToolSpec(
        name="tasks.listLists",
        description="List all of the user's Google Tasks lists.",
        method="list_task_lists",
    ),
    ToolSpec(
        name="tasks.list",
        description="List tasks in a Google Tasks list.",
        method="list_tasks",
        properties={
            "tasklistId": _TASKLIST_ID,
            "showCompleted": {"type": "boolean", "description": "Include completed tasks", "default": False},
            "showDeleted": {"type": "boolean", "description": "Include deleted tasks", "default": False},
            "showHidden": {"type": "boolean", "description": "Include hidden tasks", "default": False},
            "dueMin": {"type": "string", "description": "Lower bound for due date (RFC 3339)"},
            "dueMax": {"type": "string", "description": "Upper bound for due date (RFC 3339)"},
        },
        arguments={
            "tasklistId": "tasklist_id",
            "showCompleted": "show_completed",
            "showDeleted": "show_deleted",
            "showHidden": "show_hidden",
            "dueMin": "due_min",
            "dueMax": "due_max",
        },
    ),
    ToolSpec(
        name="tasks.create",
        description="Create a new task.",
        method="create_task",
        properties={
            "title": {"type": "string", "description": "Task title"},
            "tasklistId": _TASKLIST_ID,
            "notes": {"type": "string", "description": "Task notes/description"},
            "due": _DUE,
            "status": _STATUS,
        },
        required=("title",),
        arguments={
            "title": "title",
            "tasklistId": "tasklist_id",
            "notes": "notes",
            "due": "due",
            "status": "status",
        },
    ),
    ToolSpec(
        name="tasks.update",
        description="Update an existing task. Only the fields given are changed.",
        method="update_task",
        properties={
            "taskId": _TASK_ID,
            "tasklistId": _TASKLIST_ID,
            "title": {"type": "string", "description": "New title"},
            "notes": {"type": "string", "description": "New notes"},
            "due": _DUE,
            "status": _STATUS,
        },
        required=("taskId",),
        arguments={
            "taskId": "task_id",
            "tasklistId": "tasklist_id",
            "title": "title",
            "notes": "notes",
            "due": "due",
            "status": "status",
        },
    ),
    ToolSpec(
        name="tasks.delete",
        description="Delete a task.",
        method="delete_task",
        properties={"taskId": _TASK_ID, "tasklistId": _TASKLIST_ID},
        required=("taskId",),
        arguments={"taskId": "task_id", "tasklistId": "tasklist_id"},
    ),
    ToolSpec(
        name="tasks.get",
        description="Get a single task.",
        method="get_task",
        properties={"taskId": _TASK_ID, "tasklistId": _TASKLIST_ID},
        required=("taskId",),
        arguments={"taskId": "task_id", "tasklistId": "tasklist_id"},
    ),
]

TOOLS_BY_NAME = {tool.name: tool for tool in TASKS_TOOLS}


async def call_tool(
    service: TasksService, tool_name: str, arguments: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Execute a Tasks tool call.

    Bad tool names or arguments produce an error result rather than an
    exception, same as failures inside the service.
    """
    tool = TOOLS_BY_NAME.get(tool_name)
    if tool is None:
        return error_result(f"Unknown tool: {tool_name}")

    arguments = arguments or {}
    unknown = sorted(set(arguments) - set(tool.arguments))
    if unknown:
        return error_result(f"Unknown arguments for {tool_name}: {', '.join(unknown)}")

    missing = [name for name in tool.required if arguments.get(name) is None]
    if missing:
        return error_result(f"Missing required arguments for {tool_name}: {', '.join(missing)}")

    kwargs = {tool.arguments[name]: value for name, value in arguments.items()}
    method = getattr(service, tool.method)
    return await method(**kwargs)
