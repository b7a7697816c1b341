"""
Session Domain Errors

Typed failures raised by the session lifecycle. Each carries a stable
``code`` and a human-readable ``message`` so the API layer can render it
without knowing the concrete class.
"""

from typing import Optional


class SessionError(Exception):
    """Base class for all session lifecycle errors"""

    code = "SESSION_ERROR"
    default_message = "Session operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class TokenNotFound(SessionError):
    """Presented secret was never issued. The caller should ask for a new login."""

    code = "INVALID_TOKEN"
    default_message = "Invalid refresh token"


class TokenCompromised(SessionError):
    """
    Presented secret was already rotated, revoked or expired.

    Raised only after every active session of the owner has been revoked.
    """

    code = "TOKEN_COMPROMISED"
    default_message = (
        "Refresh token has been invalidated. All sessions have been logged out."
    )


class StorageError(SessionError):
    """Underlying persistence failure. Never retried internally."""

    code = "STORAGE_ERROR"
    default_message = "Session storage failure"
