# src/taskdesk/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.errors import ApiError, get_error_message
from ..core.models import (
    AddCollaboratorData,
    CategoryInput,
    CollaborationRole,
    CreateTaskData,
    LoginCredentials,
    RegisterData,
    Task,
    TaskCollaboration,
    TaskPriority,
    TaskStatus,
)
from ..core.state import AppContainer
from ..helpers.dates import format_date, is_due_soon, is_overdue
from ..helpers.display import priority_label, role_label, status_label

CommandHandler = Callable[[AppContainer, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, app: AppContainer, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(app, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def _due(task: Task, due_soon_days: int) -> str:
    text = format_date(task.due_date)
    if task.status == TaskStatus.COMPLETED:
        return text
    if is_overdue(task.due_date):
        return f"{text} (atrasada)"
    if is_due_soon(task.due_date, due_soon_days):
        return f"{text} (em breve)"
    return text


def format_task_line(task: Task, due_soon_days: int = 3) -> str:
    category = f" #{task.category.name}" if task.category is not None else ""
    return (
        f"[{task.id}] {task.title}{category} | {status_label(task.status)}"
        f" | {priority_label(task.priority)} | {_due(task, due_soon_days)}"
    )


def _format_collab(c: TaskCollaboration) -> str:
    who = c.user.name if c.user is not None else c.user_id
    return f"{who} ({role_label(c.role)}) on task {c.task_id}"


def _task_lines(app: AppContainer, tasks: list[Task]) -> list[str]:
    days = int(getattr(app.settings, "due_soon_days", 3))
    return [format_task_line(t, days) for t in tasks]


def _lines(header: str, items: list[str], empty: str) -> str:
    if not items:
        return empty
    return "\n".join([header, *(f"  {s}" for s in items)])


def _require_login(app: AppContainer) -> str | None:
    if not app.auth.is_authenticated:
        return "Not logged in. Use /login <email> <password>."
    return None


# ---- auth ----


async def cmd_help(app: AppContainer, args: list[str]) -> str:
    return registry.build_help()


async def cmd_login(app: AppContainer, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /login <email> <password>"
    result = await app.auth.login(LoginCredentials(email=args[0], password=args[1]))
    if not result.success:
        return f"Login failed: {result.error}"
    name = app.auth.user.name if app.auth.user is not None else args[0]
    return f"Welcome, {name}."


async def cmd_register(app: AppContainer, args: list[str]) -> str:
    if len(args) != 3:
        return "Usage: /register <name> <email> <password>"
    result = await app.auth.register(RegisterData(name=args[0], email=args[1], password=args[2]))
    if not result.success:
        return f"Registration failed: {result.error}"
    return f"Account created. Welcome, {args[0]}."


async def cmd_logout(app: AppContainer, args: list[str]) -> str:
    await app.session.logout()
    return "Logged out."


async def cmd_whoami(app: AppContainer, args: list[str]) -> str:
    user = app.auth.user
    if user is None:
        return f"Session: {app.auth.status.value}"
    return f"{user.name} <{user.email}> (id={user.id})"


async def cmd_users(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    try:
        response = await app.client.get_all_users()
    except ApiError as e:
        logger.debug("get_all_users failed", exc_info=True)
        return f"Failed to fetch users: {get_error_message(e, 'request failed')}"
    users = (response.data or []) if response.success else []
    return _lines("Users:", [f"[{u.id}] {u.name} <{u.email}>" for u in users], "No users.")


# ---- tasks ----


async def cmd_tasks(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    await app.tasks.fetch_tasks()
    if app.tasks.error:
        return f"Failed: {app.tasks.error}"
    return _lines("Tasks:", _task_lines(app, app.tasks.tasks), "No tasks.")


async def cmd_assigned(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    await app.tasks.fetch_assigned_tasks()
    if app.tasks.error:
        return f"Failed: {app.tasks.error}"
    return _lines(
        "Assigned to me:",
        _task_lines(app, app.tasks.assigned_tasks),
        "Nothing assigned to you.",
    )


async def cmd_board(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    await app.tasks.fetch_tasks()
    if app.tasks.error:
        return f"Failed: {app.tasks.error}"
    out: list[str] = []
    for status, tasks in app.tasks.tasks_by_status.items():
        out.append(f"== {status_label(status)} ({len(tasks)})")
        out.extend(f"  {line}" for line in _task_lines(app, tasks))
    return "\n".join(out)


async def cmd_overdue(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    if not app.tasks.tasks:
        await app.tasks.fetch_tasks()
    return _lines("Overdue:", _task_lines(app, app.tasks.overdue_tasks), "Nothing overdue.")


async def cmd_task(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    if len(args) != 1:
        return "Usage: /task <id>"
    task = await app.tasks.get_task_by_id(args[0])
    if task is None:
        return f"Task {args[0]} not found."
    lines = _task_lines(app, [task])
    if task.description:
        lines.append(f"  {task.description}")
    if task.assigned_user is not None:
        lines.append(f"  Assigned to: {task.assigned_user.name}")
    for c in task.collaborations or []:
        lines.append(f"  Collaborator: {_format_collab(c)}")
    return "\n".join(lines)


async def cmd_new_task(app: AppContainer, args: list[str]) -> str:
    """
    /new-task <LOW|MEDIUM|HIGH> <YYYY-MM-DD|-> <title...>
    """
    if msg := _require_login(app):
        return msg
    if len(args) < 3:
        return "Usage: /new-task <LOW|MEDIUM|HIGH> <YYYY-MM-DD|-> <title...>"
    try:
        priority = TaskPriority(args[0].upper())
    except ValueError:
        return f"Unknown priority: {args[0]}"
    user = app.auth.user
    if user is None:
        return "Not logged in. Use /login <email> <password>."
    data = CreateTaskData(
        title=" ".join(args[2:]),
        priority=priority,
        assigned_user_id=user.id,
        due_date=None if args[1] == "-" else args[1],
    )
    result = await app.tasks.create_task(data)
    if not result.success or result.data is None:
        return f"Failed: {result.error}"
    return f"Created: {_task_lines(app, [result.data])[0]}"


async def cmd_status(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    if len(args) != 2:
        return "Usage: /status <task_id> <TODO|IN_PROGRESS|COMPLETED>"
    try:
        status = TaskStatus(args[1].upper())
    except ValueError:
        return f"Unknown status: {args[1]}"
    result = await app.tasks.update_task_status(args[0], status)
    if not result.success:
        return f"Failed: {result.error}"
    if result.data is None:
        return f"Updated task {args[0]}."
    return f"Updated: {_task_lines(app, [result.data])[0]}"


async def cmd_delete_task(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    if len(args) != 1:
        return "Usage: /delete-task <id>"
    result = await app.tasks.delete_task(args[0])
    return f"Deleted task {args[0]}." if result.success else f"Failed: {result.error}"


# ---- categories ----


async def cmd_categories(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    await app.categories.fetch_categories()
    if app.categories.error:
        return f"Failed: {app.categories.error}"
    return _lines(
        "Categories:",
        [f"[{c.id}] {c.name}" + (f" ({c.color})" if c.color else "") for c in app.categories.categories],
        "No categories.",
    )


async def cmd_new_category(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    if not args:
        return "Usage: /new-category <name> [#color]"
    color = args[-1] if len(args) > 1 and args[-1].startswith("#") else None
    name_parts = args[:-1] if color else args
    result = await app.categories.create_category(CategoryInput(name=" ".join(name_parts), color=color))
    if not result.success or result.data is None:
        return f"Failed: {result.error}"
    return f"Created category [{result.data.id}] {result.data.name}."


async def cmd_delete_category(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    if len(args) != 1:
        return "Usage: /delete-category <id>"
    result = await app.categories.delete_category(args[0])
    return f"Deleted category {args[0]}." if result.success else f"Failed: {result.error}"


# ---- collaborations ----


async def cmd_collabs(app: AppContainer, args: list[str]) -> str:
    """
    /collabs            -> tasks shared with me
    /collabs <task_id>  -> collaborators of a task
    """
    if msg := _require_login(app):
        return msg
    if args:
        collabs = await app.collaborations.fetch_task_collaborators(args[0])
    else:
        await app.collaborations.load_collaborations()
        collabs = app.collaborations.collaborations
    if app.collaborations.error:
        return f"Failed: {app.collaborations.error}"
    return _lines("Collaborations:", [_format_collab(c) for c in collabs], "No collaborations.")


async def cmd_share(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    if len(args) not in (2, 3):
        return "Usage: /share <task_id> <user_id> [OWNER|COLLABORATOR|VIEWER]"
    try:
        role = CollaborationRole(args[2].upper()) if len(args) == 3 else CollaborationRole.COLLABORATOR
    except ValueError:
        return f"Unknown role: {args[2]}"
    result = await app.collaborations.add_collaborator(
        AddCollaboratorData(task_id=args[0], user_id=args[1], role=role)
    )
    if not result.success:
        return f"Failed: {result.error}"
    return f"Shared task {args[0]} with {args[1]} as {role_label(role)}."


async def cmd_unshare(app: AppContainer, args: list[str]) -> str:
    if msg := _require_login(app):
        return msg
    if len(args) != 2:
        return "Usage: /unshare <task_id> <user_id>"
    result = await app.collaborations.remove_collaborator(args[0], args[1])
    return f"Removed {args[1]} from task {args[0]}." if result.success else f"Failed: {result.error}"


# ---- reports ----


async def cmd_report(app: AppContainer, args: list[str]) -> str:
    """
    /report                          -> my report
    /report <start> <end> [user_id]  -> completed tasks in a period
    """
    if msg := _require_login(app):
        return msg
    reports = app.reports

    if args:
        if len(args) not in (2, 3):
            return "Usage: /report [<start> <end> [user_id]]"
        completed = await reports.fetch_completed_in_period(args[0], args[1], args[2] if len(args) == 3 else None)
        if reports.error or completed is None:
            return f"Failed: {reports.error or 'no data'}"
        return (
            f"Completed from {format_date(completed.start_date)} to {format_date(completed.end_date)}: "
            f"{completed.completed_tasks}"
        )

    report = await reports.fetch_user_report()
    if reports.error or report is None:
        return f"Failed: {reports.error or 'no data'}"
    lines = [
        "Report:",
        f"  Total: {report.total_tasks}",
        *(f"  {status_label(s)}: {n}" for s, n in report.tasks_by_status.items()),
        f"  Overdue: {report.overdue_tasks}",
        f"  Completed this month: {report.completed_this_month}",
    ]
    lines.extend(f"  #{c.category_name}: {c.count}" for c in report.tasks_by_category)
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("login", cmd_login, help_text="Log in: /login <email> <password>.")
registry.register("register", cmd_register, help_text="Create an account: /register <name> <email> <password>.")
registry.register("logout", cmd_logout, help_text="End the session and clear local data.")
registry.register("whoami", cmd_whoami, help_text="Show the current user.", aliases=["me"])
registry.register("users", cmd_users, help_text="List users (for sharing tasks).")
registry.register("tasks", cmd_tasks, help_text="List all tasks.", aliases=["ls"])
registry.register("assigned", cmd_assigned, help_text="List tasks assigned to me.")
registry.register("board", cmd_board, help_text="Tasks grouped by status.")
registry.register("overdue", cmd_overdue, help_text="Tasks past their due date.")
registry.register("task", cmd_task, help_text="Show one task: /task <id>.")
registry.register(
    "new-task", cmd_new_task, help_text="Create a task: /new-task <LOW|MEDIUM|HIGH> <YYYY-MM-DD|-> <title>."
)
registry.register("status", cmd_status, help_text="Move a task: /status <id> <TODO|IN_PROGRESS|COMPLETED>.")
registry.register("delete-task", cmd_delete_task, help_text="Delete a task: /delete-task <id>.")
registry.register("categories", cmd_categories, help_text="List categories.")
registry.register("new-category", cmd_new_category, help_text="Create a category: /new-category <name> [#color].")
registry.register("delete-category", cmd_delete_category, help_text="Delete a category: /delete-category <id>.")
registry.register("collabs", cmd_collabs, help_text="Collaborations: /collabs [task_id].")
registry.register("share", cmd_share, help_text="Share a task: /share <task_id> <user_id> [role].")
registry.register("unshare", cmd_unshare, help_text="Unshare a task: /unshare <task_id> <user_id>.")
registry.register("report", cmd_report, help_text="Reports: /report [<start> <end> [user_id]].")
