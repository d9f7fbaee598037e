"""CLI for workspace-tasks.

Usage:
    workspace-tasks init                          # Create directories, show setup instructions
    workspace-tasks status                        # Show credential status
    workspace-tasks tasks lists                   # List task lists
    workspace-tasks tasks list [--tasklist ID]    # List tasks
    workspace-tasks tasks get TASK_ID             # Show a task
    workspace-tasks tasks create TITLE [--notes] [--due] [--status]
    workspace-tasks tasks update TASK_ID [--title] [--notes] [--due] [--status]
    workspace-tasks tasks delete TASK_ID
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

STATUSES = ["needsAction", "completed"]


def cmd_init() -> int:
    """Initialize the credential directory structure."""
    from workspace_tasks.config import (
        ENV_FILE,
        GOOGLE_DIR,
        REPO_ROOT,
        ensure_google_dir,
        google_token_path,
        service_account_path,
    )

    print("=" * 60)
    print("WORKSPACE-TASKS SETUP")
    print("=" * 60)
    print()
    print(f"Repository: {REPO_ROOT}")
    print()

    ensure_google_dir()
    print(f"Created: {GOOGLE_DIR}/")
    print()

    print("Credential locations:")
    print()
    print(f"  {ENV_FILE}")
    print("    WORKSPACE_TASKS_TIMEOUT, WORKSPACE_TASKS_NUM_RETRIES")
    print("    WORKSPACE_TASKS_TOKEN, WORKSPACE_TASKS_SERVICE_ACCOUNT (path overrides)")
    print()
    print(f"  {google_token_path()}")
    print("    Authorized-user token with the tasks scope")
    print()
    print(f"  {service_account_path()}")
    print("    Service account key (optional)")
    print()
    return 0


def cmd_status() -> int:
    """Show status of configured credentials and request options."""
    from workspace_tasks.config import get_credential_status, get_request_options

    status = get_credential_status()

    print("=" * 60)
    print("WORKSPACE-TASKS CREDENTIAL STATUS")
    print("=" * 60)
    print()
    print(f"Repository: {status['repo_root']}")
    print(f".env:       {'[x]' if status['env_file'] else '[ ]'}")
    print()
    print("Google:")
    print(f"  token.json:             {'[x]' if status['google']['token'] else '[ ]'}")
    print(f"  service_account_key:    {'[x]' if status['google']['service_account'] else '[ ]'}")
    print()

    try:
        options = get_request_options()
    except ValueError as e:
        print(f"Request options: {e}")
        return 1

    print(f"Timeout:     {options.timeout}s")
    print(f"Num retries: {options.num_retries}")
    return 0


def build_service(auth_kind: str, subject: str | None = None):
    """Create a TasksService backed by the configured credentials."""
    from workspace_tasks.google import ServiceAccountAuth, TokenFileAuth
    from workspace_tasks.tasks import TasksService

    if auth_kind == "service-account":
        auth = ServiceAccountAuth(subject=subject)
    else:
        auth = TokenFileAuth()
    return TasksService(auth)


async def _run_tasks_command(service, args: argparse.Namespace) -> dict:
    if args.tasks_command == "lists":
        return await service.list_task_lists()
    if args.tasks_command == "list":
        return await service.list_tasks(
            tasklist_id=args.tasklist,
            show_completed=args.show_completed,
            show_deleted=args.show_deleted,
            show_hidden=args.show_hidden,
            due_min=args.due_min,
            due_max=args.due_max,
        )
    if args.tasks_command == "get":
        return await service.get_task(args.task_id, tasklist_id=args.tasklist)
    if args.tasks_command == "create":
        return await service.create_task(
            args.title,
            tasklist_id=args.tasklist,
            notes=args.notes,
            due=args.due,
            status=args.status,
        )
    if args.tasks_command == "update":
        return await service.update_task(
            args.task_id,
            tasklist_id=args.tasklist,
            title=args.title,
            notes=args.notes,
            due=args.due,
            status=args.status,
        )
    return await service.delete_task(args.task_id, tasklist_id=args.tasklist)


def cmd_tasks(args: argparse.Namespace) -> int:
    """Run a tasks operation and print its JSON result."""
    from workspace_tasks.google import GoogleAuthError

    try:
        service = build_service(args.auth, args.subject)
    except (GoogleAuthError, ValueError) as e:
        print(f"Error: {e}")
        print("Run 'workspace-tasks init' for setup instructions")
        return 1

    result = asyncio.run(_run_tasks_command(service, args))
    text = result["content"][0]["text"]
    payload = json.loads(text)
    print(json.dumps(payload, indent=2))

    if isinstance(payload, dict) and "error" in payload:
        return 1
    return 0


def _add_tasklist_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tasklist",
        type=str,
        default=None,
        help="Task list ID (default: first task list)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="workspace-tasks",
        description="Google Tasks operations for tool-calling agents",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("init", help="Initialize credential directories")
    subparsers.add_parser("status", help="Show credential status")

    # Tasks subcommand
    tasks_parser = subparsers.add_parser("tasks", help="Google Tasks operations")
    tasks_parser.add_argument(
        "--auth",
        choices=["token", "service-account"],
        default="token",
        help="Credential source (default: token)",
    )
    tasks_parser.add_argument(
        "--subject",
        type=str,
        default=None,
        help="User to impersonate with a service account",
    )
    tasks_subparsers = tasks_parser.add_subparsers(dest="tasks_command", help="Command")

    tasks_subparsers.add_parser("lists", help="List task lists")

    list_parser = tasks_subparsers.add_parser("list", help="List tasks")
    _add_tasklist_arg(list_parser)
    list_parser.add_argument("--show-completed", action="store_true", help="Include completed tasks")
    list_parser.add_argument("--show-deleted", action="store_true", help="Include deleted tasks")
    list_parser.add_argument("--show-hidden", action="store_true", help="Include hidden tasks")
    list_parser.add_argument("--due-min", type=str, default=None, help="RFC 3339 lower bound")
    list_parser.add_argument("--due-max", type=str, default=None, help="RFC 3339 upper bound")

    get_parser = tasks_subparsers.add_parser("get", help="Show a task")
    get_parser.add_argument("task_id", help="Task ID")
    _add_tasklist_arg(get_parser)

    create_parser = tasks_subparsers.add_parser("create", help="Create a task")
    create_parser.add_argument("title", help="Task title")
    _add_tasklist_arg(create_parser)
    create_parser.add_argument("--notes", type=str, default=None, help="Task notes")
    create_parser.add_argument("--due", type=str, default=None, help="RFC 3339 due date")
    create_parser.add_argument("--status", choices=STATUSES, default=None, help="Task status")

    update_parser = tasks_subparsers.add_parser("update", help="Update a task")
    update_parser.add_argument("task_id", help="Task ID")
    _add_tasklist_arg(update_parser)
    update_parser.add_argument("--title", type=str, default=None, help="New title")
    update_parser.add_argument("--notes", type=str, default=None, help="New notes")
    update_parser.add_argument("--due", type=str, default=None, help="New RFC 3339 due date")
    update_parser.add_argument("--status", choices=STATUSES, default=None, help="New status")

    delete_parser = tasks_subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", help="Task ID")
    _add_tasklist_arg(delete_parser)

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "init":
        return cmd_init()

    if args.command == "status":
        return cmd_status()

    if args.command == "tasks":
        if args.tasks_command is None:
            tasks_parser.print_help()
            return 0
        return cmd_tasks(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
