"""Tests for the session manager and route guard."""

import pytest

from taskboard_mcp import AuthError, AuthEvent, GuardState, SessionManager
from taskboard_mcp.notifications import NotificationChannel

from .fakes import FakeAuth, FakeStore, make_session


@pytest.fixture
def fresh_store():
    return FakeStore()


class TestInitialize:
    """Tests for the initial session check."""

    @pytest.mark.asyncio
    async def test_loading_until_initialized(self, fresh_store):
        """Test loading is True before and False after the check."""
        manager = SessionManager(FakeAuth(), fresh_store, NotificationChannel())
        assert manager.loading is True
        assert manager.guard() == GuardState.LOADING

        await manager.initialize()

        assert manager.loading is False
        assert manager.user is None
        assert manager.guard() == GuardState.REDIRECT

    @pytest.mark.asyncio
    async def test_adopts_existing_session(self, fresh_store):
        """Test an existing session becomes the current user."""
        auth = FakeAuth(session=make_session("user-9", "bob@example.com"))
        manager = SessionManager(auth, fresh_store, NotificationChannel())
        await manager.initialize()
        assert manager.user_id == "user-9"
        assert manager.guard() == GuardState.ALLOW

    @pytest.mark.asyncio
    async def test_creates_missing_profile_once(self, fresh_store):
        """Test a user without a profile gets exactly one with matching id and email."""
        auth = FakeAuth(session=make_session("user-9", "bob@example.com", first_name="Bob"))
        manager = SessionManager(auth, fresh_store, NotificationChannel())

        await manager.initialize()

        profiles = fresh_store.tables["profiles"]
        assert profiles == [{"id": "user-9", "email": "bob@example.com", "first_name": "Bob", "last_name": None}]

    @pytest.mark.asyncio
    async def test_existing_profile_is_not_duplicated(self, fresh_store):
        """Test the existence check skips the insert."""
        fresh_store.seed("profiles", {"id": "user-9", "email": "bob@example.com"})
        auth = FakeAuth(session=make_session("user-9", "bob@example.com"))
        manager = SessionManager(auth, fresh_store, NotificationChannel())

        await manager.initialize()
        await manager.ensure_profile(manager.user)

        assert len(fresh_store.tables["profiles"]) == 1
        assert [c[0] for c in fresh_store.calls] == ["select", "select"]

    @pytest.mark.asyncio
    async def test_profile_insert_resolves_conflicts(self, fresh_store):
        """Test the insert goes through upsert on the id column."""
        auth = FakeAuth(session=make_session("user-9"))
        manager = SessionManager(auth, fresh_store, NotificationChannel())
        await manager.initialize()
        assert fresh_store.calls[-1][0] == "upsert"

    @pytest.mark.asyncio
    async def test_profile_check_error_is_notified(self, fresh_store):
        """Test a failed profile check is reported, not raised, and loading ends."""
        fresh_store.fail("select", "profiles", message="relation does not exist", code="42P01")
        notifier = NotificationChannel()
        manager = SessionManager(FakeAuth(session=make_session()), fresh_store, notifier)

        await manager.initialize()

        notes = notifier.history
        assert notes[-1].title == "Error checking profile"
        assert notes[-1].description == "relation does not exist (42P01)"
        assert manager.loading is False
        assert manager.user is not None
        assert fresh_store.tables["profiles"] == []

    @pytest.mark.asyncio
    async def test_profile_create_error_is_notified(self, fresh_store):
        """Test a failed profile insert is reported."""
        fresh_store.fail("upsert", "profiles", message="duplicate key", code="23505")
        notifier = NotificationChannel()
        manager = SessionManager(FakeAuth(session=make_session()), fresh_store, notifier)
        await manager.initialize()
        assert notifier.history[-1].title == "Error creating user profile"

    @pytest.mark.asyncio
    async def test_session_error_is_notified(self, fresh_store):
        """Test a failing session lookup still ends loading."""
        auth = FakeAuth()
        auth.get_session_error = AuthError("Network down", "network")
        notifier = NotificationChannel()
        manager = SessionManager(auth, fresh_store, notifier)

        await manager.initialize()

        assert manager.loading is False
        assert manager.user is None
        assert notifier.history[-1].title == "Error getting initial session"


class TestAuthChanges:
    """Tests for reacting to session change notifications."""

    @pytest.mark.asyncio
    async def test_sign_in_event_adopts_user_and_profile(self, fresh_store):
        """Test a sign-in from elsewhere updates the user and ensures the profile."""
        auth = FakeAuth()
        manager = SessionManager(auth, fresh_store, NotificationChannel())
        await manager.initialize()

        await auth.emit(AuthEvent.SIGNED_IN, make_session("user-3", "cy@example.com"))

        assert manager.user_id == "user-3"
        assert [p["id"] for p in fresh_store.tables["profiles"]] == ["user-3"]

    @pytest.mark.asyncio
    async def test_sign_out_event_clears_user(self, fresh_store):
        """Test a sign-out event clears the user."""
        auth = FakeAuth(session=make_session())
        manager = SessionManager(auth, fresh_store, NotificationChannel())
        await manager.initialize()

        await auth.emit(AuthEvent.SIGNED_OUT, None)

        assert manager.user is None
        assert manager.guard() == GuardState.REDIRECT

    @pytest.mark.asyncio
    async def test_close_unsubscribes(self, fresh_store):
        """Test close stops listening and can be called twice."""
        auth = FakeAuth()
        manager = SessionManager(auth, fresh_store, NotificationChannel())
        await manager.initialize()
        assert auth.listener_count == 1

        await manager.close()
        await manager.close()

        assert auth.listener_count == 0
        await auth.emit(AuthEvent.SIGNED_IN, make_session("user-3"))
        assert manager.user is None


class TestSignInOut:
    """Tests for explicit sign-in and sign-out."""

    @pytest.mark.asyncio
    async def test_sign_in_success(self, fresh_store):
        """Test password sign-in adopts the user through the change listener."""
        auth = FakeAuth()
        auth.add_account("ada@example.com", "secret", user_id="user-1")
        notifier = NotificationChannel()
        manager = SessionManager(auth, fresh_store, notifier)
        await manager.initialize()

        assert await manager.sign_in("ada@example.com", "secret") is True
        assert manager.user_id == "user-1"
        assert notifier.history[-1].title == "Signed in"

    @pytest.mark.asyncio
    async def test_sign_in_bad_password(self, fresh_store):
        """Test rejected credentials are reported and nobody is signed in."""
        auth = FakeAuth()
        auth.add_account("ada@example.com", "secret")
        notifier = NotificationChannel()
        manager = SessionManager(auth, fresh_store, notifier)
        await manager.initialize()

        assert await manager.sign_in("ada@example.com", "wrong") is False
        assert manager.user is None
        note = notifier.history[-1]
        assert note.is_error
        assert note.description == "Invalid login credentials (invalid_credentials)"

    @pytest.mark.asyncio
    async def test_sign_out_success(self, fresh_store):
        """Test sign-out clears the user."""
        manager = SessionManager(FakeAuth(session=make_session()), fresh_store, NotificationChannel())
        await manager.initialize()
        assert await manager.sign_out() is True
        assert manager.user is None

    @pytest.mark.asyncio
    async def test_sign_out_failure_is_notified(self, fresh_store):
        """Test a failing sign-out is reported, not raised."""
        auth = FakeAuth(session=make_session())
        auth.sign_out_error = AuthError("Session not found", "session_not_found")
        notifier = NotificationChannel()
        manager = SessionManager(auth, fresh_store, notifier)
        await manager.initialize()

        assert await manager.sign_out() is False
        assert notifier.history[-1].title == "Error signing out"
