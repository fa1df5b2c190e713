"""Pytest configuration and fixtures for taskboard-mcp tests."""

from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from taskboard_mcp.app import TaskboardApp
from taskboard_mcp.config import Settings
from taskboard_mcp.notifications import NotificationChannel
from taskboard_mcp.repository import TaskRepository
from taskboard_mcp.session import SessionManager

from .fakes import FakeAuth, FakeStore, make_session


@pytest.fixture
def settings():
    """Settings pointing at an unreachable backend; fakes stand in for it."""
    return Settings(url="https://board.example.test", anon_key="anon-key")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def auth():
    """Auth service with a session already signed in as user-1."""
    return FakeAuth(session=make_session("user-1", "ada@example.com", first_name="Ada", last_name="Lovelace"))


@pytest.fixture
def notifier():
    return NotificationChannel()


@pytest_asyncio.fixture
async def session(auth, store, notifier):
    """An initialized SessionManager for the signed-in user."""
    manager = SessionManager(auth, store, notifier)
    await manager.initialize()
    store.calls.clear()
    yield manager
    await manager.close()


@pytest.fixture
def repo(store, session, notifier):
    return TaskRepository(store, session, notifier)


@pytest_asyncio.fixture
async def app(settings, auth, store):
    """A started TaskboardApp wired to the fakes."""
    board = TaskboardApp(settings, auth=auth, store=store)
    await board.start()
    store.calls.clear()
    yield board
    await board.close()


@pytest.fixture
def ctx(app):
    """MCP request context whose lifespan context is the app."""
    context = MagicMock()
    context.request_context.lifespan_context = app
    return context
