"""Pydantic models for Taskboard MCP."""

from taskboard_mcp.models.inputs import (
    AddCommentInput,
    AddTaskInput,
    DeleteTaskInput,
    GetTaskInput,
    ListProfilesInput,
    ListTasksInput,
    ModifyTaskInput,
    SignInInput,
    SignOutInput,
    WhoAmIInput,
)
from taskboard_mcp.models.session import SessionModel, UserModel
from taskboard_mcp.models.task import CommentModel, ProfileModel, TaskModel

__all__ = [
    # Record models
    "TaskModel",
    "CommentModel",
    "ProfileModel",
    # Session models
    "UserModel",
    "SessionModel",
    # Session input models
    "SignInInput",
    "SignOutInput",
    "WhoAmIInput",
    # Task input models
    "ListTasksInput",
    "GetTaskInput",
    "AddTaskInput",
    "ModifyTaskInput",
    "DeleteTaskInput",
    "AddCommentInput",
    "ListProfilesInput",
]
