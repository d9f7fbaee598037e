"""Google Tasks service for tool-calling agents."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Literal

import httplib2
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from workspace_tasks.config import RequestOptions, get_request_options
from workspace_tasks.google.auth import AuthManager

logger = logging.getLogger(__name__)

# Tasks API alias for the user's implicit default list
DEFAULT_TASKLIST = "@default"

TaskStatus = Literal["needsAction", "completed"]


def text_result(payload: Any) -> dict[str, Any]:
    """Wrap a JSON-serializable payload as a single text content item."""
    return {"content": [{"type": "text", "text": json.dumps(payload)}]}


def error_result(error: BaseException | str) -> dict[str, Any]:
    """Wrap an error as ``{"error": message}`` text content."""
    return text_result({"error": error_message(error)})


def error_message(error: BaseException | str) -> str:
    """Extract a human-readable message from an error."""
    if isinstance(error, HttpError):
        return getattr(error, "reason", None) or str(error)
    return str(error) or type(error).__name__


class TasksService:
    """Google Tasks operations returning uniform text results.

    Every public method is a coroutine returning
    ``{"content": [{"type": "text", "text": <json>}]}``. On success the
    JSON is the API response (or its ``items``); on failure it is
    ``{"error": <message>}``. Methods never raise.

    When no task list is given, the first list returned by the API is
    used and remembered for the lifetime of the service.

    Usage:
        service = TasksService(TokenFileAuth())
        result = await service.create_task(title="Review PR", due="2026-01-25T00:00:00.000Z")
    """

    def __init__(
        self,
        auth_manager: AuthManager,
        request_options: RequestOptions | None = None,
    ) -> None:
        """Initialize Tasks service.

        Args:
            auth_manager: Provider of authenticated credentials.
            request_options: Timeout and retry settings. Defaults to the environment.
        """
        self._auth_manager = auth_manager
        self._options = request_options or get_request_options()
        self._default_tasklist_id: str | None = None
        self._default_lock = asyncio.Lock()

    async def _get_tasks_client(self) -> Any:
        """Build a Tasks API client with fresh credentials."""
        logger.debug("Getting authenticated client for tasks...")
        credentials = await self._auth_manager.get_authenticated_client()
        logger.debug("Got auth client, creating tasks instance...")
        http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=self._options.timeout))
        return build("tasks", "v1", http=http, cache_discovery=False)

    async def _execute(self, request: Any) -> Any:
        """Run a prepared API request off the event loop."""
        return await asyncio.to_thread(request.execute, num_retries=self._options.num_retries)

    async def _resolve_tasklist_id(self, tasklist_id: str | None) -> str:
        if tasklist_id:
            return tasklist_id
        return await self._get_default_tasklist_id()

    async def _get_default_tasklist_id(self) -> str:
        if self._default_tasklist_id:
            return self._default_tasklist_id

        async with self._default_lock:
            if self._default_tasklist_id:
                return self._default_tasklist_id

            logger.info("Getting default tasklist ID...")
            tasks = await self._get_tasks_client()
            result = await self._execute(tasks.tasklists().list())

            # The API lists the user's primary list ("My Tasks") first
            items = result.get("items") or []
            default_list = items[0] if items else None
            if default_list and default_list.get("id"):
                logger.info(
                    f"Found default tasklist: {default_list.get('title')} ({default_list['id']})"
                )
                self._default_tasklist_id = default_list["id"]
                return default_list["id"]

            logger.info(f'No tasklists found, defaulting to "{DEFAULT_TASKLIST}"')
            return DEFAULT_TASKLIST

    # =========================================================================
    # Task Lists
    # =========================================================================

    async def list_task_lists(self) -> dict[str, Any]:
        """List all task lists."""
        logger.info("list_task_lists called")
        try:
            tasks = await self._get_tasks_client()
            result = await self._execute(tasks.tasklists().list())
            items = result.get("items") or []
            logger.info(f"Found {len(items)} tasklists.")
            return text_result(items)
        except Exception as e:
            logger.error(f"Error during tasks.list_task_lists: {error_message(e)}")
            return error_result(e)

    # =========================================================================
    # Tasks
    # =========================================================================

    async def list_tasks(
        self,
        tasklist_id: str | None = None,
        show_completed: bool = False,
        show_deleted: bool = False,
        show_hidden: bool = False,
        due_min: str | None = None,
        due_max: str | None = None,
    ) -> dict[str, Any]:
        """List tasks in a task list.

        Args:
            tasklist_id: Task list ID. Defaults to the user's first list.
            show_completed: Include completed tasks.
            show_deleted: Include deleted tasks.
            show_hidden: Include hidden tasks.
            due_min: Lower bound for due date (RFC 3339).
            due_max: Upper bound for due date (RFC 3339).
        """
        try:
            final_tasklist_id = await self._resolve_tasklist_id(tasklist_id)
            logger.info(f"Listing tasks for tasklist: {final_tasklist_id}")

            tasks = await self._get_tasks_client()
            result = await self._execute(
                tasks.tasks().list(
                    tasklist=final_tasklist_id,
                    showCompleted=show_completed,
                    showDeleted=show_deleted,
                    showHidden=show_hidden,
                    dueMin=due_min,
                    dueMax=due_max,
                )
            )
            items = result.get("items") or []
            logger.info(f"Found {len(items)} tasks.")
            return text_result(items)
        except Exception as e:
            logger.error(f"Error during tasks.list_tasks: {error_message(e)}")
            return error_result(e)

    async def create_task(
        self,
        title: str,
        tasklist_id: str | None = None,
        notes: str | None = None,
        due: str | None = None,
        status: TaskStatus | None = None,
    ) -> dict[str, Any]:
        """Create a new task.

        Args:
            title: Task title.
            tasklist_id: Task list ID. Defaults to the user's first list.
            notes: Task notes/description.
            due: Due date as an RFC 3339 timestamp.
            status: "needsAction" or "completed".
        """
        try:
            final_tasklist_id = await self._resolve_tasklist_id(tasklist_id)
            logger.info(f"Creating task in tasklist: {final_tasklist_id}")
            logger.debug(f"Task title: {title}")

            tasks = await self._get_tasks_client()
            # Full payload: every field is sent, unset ones as null
            body = {
                "title": title,
                "notes": notes,
                "due": due,
                "status": status,
            }
            result = await self._execute(tasks.tasks().insert(tasklist=final_tasklist_id, body=body))

            logger.info(f"Successfully created task: {result.get('id')}")
            return text_result(result)
        except Exception as e:
            logger.error(f"Error during tasks.create_task: {error_message(e)}")
            return error_result(e)

    async def update_task(
        self,
        task_id: str,
        tasklist_id: str | None = None,
        title: str | None = None,
        notes: str | None = None,
        due: str | None = None,
        status: TaskStatus | None = None,
    ) -> dict[str, Any]:
        """Update fields of an existing task.

        Uses PATCH semantics: only the fields given here are sent, all
        others are left untouched on the server. This differs from
        ``create_task``, which always sends every field.

        Args:
            task_id: Task ID to update.
            tasklist_id: Task list ID. Defaults to the user's first list.
            title: New title.
            notes: New notes.
            due: New due date (RFC 3339).
            status: New status ("needsAction" or "completed").
        """
        try:
            final_tasklist_id = await self._resolve_tasklist_id(tasklist_id)
            logger.info(f"Updating task {task_id} in tasklist: {final_tasklist_id}")

            tasks = await self._get_tasks_client()
            fields = {"title": title, "notes": notes, "due": due, "status": status}
            body = {key: value for key, value in fields.items() if value is not None}

            result = await self._execute(
                tasks.tasks().patch(tasklist=final_tasklist_id, task=task_id, body=body)
            )

            logger.info(f"Successfully updated task: {result.get('id')}")
            return text_result(result)
        except Exception as e:
            logger.error(f"Error during tasks.update_task: {error_message(e)}")
            return error_result(e)

    async def delete_task(self, task_id: str, tasklist_id: str | None = None) -> dict[str, Any]:
        """Delete a task.

        Args:
            task_id: Task ID to delete.
            tasklist_id: Task list ID. Defaults to the user's first list.
        """
        try:
            final_tasklist_id = await self._resolve_tasklist_id(tasklist_id)
            logger.info(f"Deleting task {task_id} from tasklist: {final_tasklist_id}")

            tasks = await self._get_tasks_client()
            await self._execute(tasks.tasks().delete(tasklist=final_tasklist_id, task=task_id))

            logger.info(f"Successfully deleted task: {task_id}")
            return text_result({"message": f"Successfully deleted task {task_id}"})
        except Exception as e:
            logger.error(f"Error during tasks.delete_task: {error_message(e)}")
            return error_result(e)

    async def get_task(self, task_id: str, tasklist_id: str | None = None) -> dict[str, Any]:
        """Get a specific task.

        Args:
            task_id: Task ID.
            tasklist_id: Task list ID. Defaults to the user's first list.
        """
        try:
            final_tasklist_id = await self._resolve_tasklist_id(tasklist_id)
            logger.info(f"Getting task {task_id} from tasklist: {final_tasklist_id}")

            tasks = await self._get_tasks_client()
            result = await self._execute(tasks.tasks().get(tasklist=final_tasklist_id, task=task_id))

            logger.info(f"Successfully retrieved task: {result.get('id')}")
            return text_result(result)
        except Exception as e:
            logger.error(f"Error during tasks.get_task: {error_message(e)}")
            return error_result(e)
