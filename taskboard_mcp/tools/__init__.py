"""MCP tool definitions for Taskboard."""

# Import all tools to register them with the MCP server
from taskboard_mcp.tools.core import (
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

__all__ = [
    # Session tools
    "taskboard_sign_in",
    "taskboard_sign_out",
    "taskboard_whoami",
    # Task tools
    "taskboard_list",
    "taskboard_get",
    "taskboard_add",
    "taskboard_modify",
    "taskboard_delete",
    "taskboard_comment",
    "taskboard_profiles",
]
