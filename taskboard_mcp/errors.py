"""Exceptions raised by the remote store and auth clients."""


class TaskboardError(Exception):
    """Base error carrying a backend message and code."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def describe(self) -> str:
        """Render as ``message (code)``, the form shown to users."""
        if self.code:
            return f"{self.message} ({self.code})"
        return self.message


class StoreError(TaskboardError):
    """Error returned by a row-level store operation."""


class AuthError(TaskboardError):
    """Error returned by the authentication service."""
