"""Entry point for ``python -m taskboard_mcp``."""

from taskboard_mcp.server import run

if __name__ == "__main__":
    run()
