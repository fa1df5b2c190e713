"""FastMCP server initialization for Taskboard MCP."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from taskboard_mcp.app import TaskboardApp
from taskboard_mcp.config import Settings
from taskboard_mcp.logging_setup import setup_logging


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[TaskboardApp]:
    """Build the client on startup and tear it down on shutdown."""
    app = TaskboardApp(Settings.from_env())
    await app.start()
    try:
        yield app
    finally:
        await app.close()


# Initialize the MCP server
mcp = FastMCP("taskboard_mcp", lifespan=app_lifespan)


def run() -> None:
    """Run the MCP server."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    # Importing the tools registers them with the server
    import taskboard_mcp.tools  # noqa: F401

    mcp.run()
