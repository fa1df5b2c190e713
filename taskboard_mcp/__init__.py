"""
MCP Server for a hosted task board.

This server lets an assistant sign in to a task board backed by a hosted
database and auth service, then list, create, edit, delete and comment on
tasks. Persistence, authentication and queries all live in the backend;
this package keeps a local copy of the task list for filtering.
"""

# Re-export enums
from taskboard_mcp.enums import AuthEvent, GuardState, Priority, ResponseFormat, Severity, TaskStatus

# Re-export errors and settings
from taskboard_mcp.config import Settings
from taskboard_mcp.errors import AuthError, StoreError, TaskboardError

# Re-export models
from taskboard_mcp.models import (
    AddCommentInput,
    AddTaskInput,
    CommentModel,
    DeleteTaskInput,
    GetTaskInput,
    ListProfilesInput,
    ListTasksInput,
    ModifyTaskInput,
    ProfileModel,
    SessionModel,
    SignInInput,
    SignOutInput,
    TaskModel,
    UserModel,
    WhoAmIInput,
)
from taskboard_mcp.notifications import Notification, NotificationChannel

# Re-export the client layers
from taskboard_mcp.app import TaskboardApp
from taskboard_mcp.repository import TaskRepository
from taskboard_mcp.session import SessionManager

# Re-export MCP server instance
from taskboard_mcp.server import mcp

# Re-export tools
from taskboard_mcp.tools import (
    taskboard_add,
    taskboard_comment,
    taskboard_delete,
    taskboard_get,
    taskboard_list,
    taskboard_modify,
    taskboard_profiles,
    taskboard_sign_in,
    taskboard_sign_out,
    taskboard_whoami,
)

# Re-export utilities (including private functions used by tests)
from taskboard_mcp.utils import (
    AuthClient,
    RemoteStore,
    StoreResponse,
    Subscription,
    _format_notification,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    _parse_task,
    _parse_tasks,
    assigned_to,
    filter_by_title,
)

__all__ = [
    # Enums
    "ResponseFormat",
    "TaskStatus",
    "Priority",
    "Severity",
    "AuthEvent",
    "GuardState",
    # Settings and errors
    "Settings",
    "TaskboardError",
    "StoreError",
    "AuthError",
    # Record and session models
    "TaskModel",
    "CommentModel",
    "ProfileModel",
    "UserModel",
    "SessionModel",
    # Input models
    "SignInInput",
    "SignOutInput",
    "WhoAmIInput",
    "ListTasksInput",
    "GetTaskInput",
    "AddTaskInput",
    "ModifyTaskInput",
    "DeleteTaskInput",
    "AddCommentInput",
    "ListProfilesInput",
    # Notifications
    "Notification",
    "NotificationChannel",
    # Client layers
    "AuthClient",
    "RemoteStore",
    "StoreResponse",
    "Subscription",
    "SessionManager",
    "TaskRepository",
    "TaskboardApp",
    # Utility functions
    "filter_by_title",
    "assigned_to",
    "_parse_task",
    "_parse_tasks",
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
    "_format_notification",
    # Tools
    "taskboard_sign_in",
    "taskboard_sign_out",
    "taskboard_whoami",
    "taskboard_list",
    "taskboard_get",
    "taskboard_add",
    "taskboard_modify",
    "taskboard_delete",
    "taskboard_comment",
    "taskboard_profiles",
    # MCP server instance
    "mcp",
]
