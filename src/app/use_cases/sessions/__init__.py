"""
Session Use Cases

Caller flows around the session lifecycle: issue, refresh, revoke.
"""

from .issue_session_use_case import IssueSessionUseCase
from .refresh_session_use_case import RefreshSessionUseCase
from .revoke_session_use_case import RevokeSessionUseCase
from .dtos import (
    IssueSessionResponse,
    RefreshSessionResponse,
    RevokeSessionResponse,
)

__all__ = [
    # Use Cases
    "IssueSessionUseCase",
    "RefreshSessionUseCase",
    "RevokeSessionUseCase",
    # DTOs - Responses
    "IssueSessionResponse",
    "RefreshSessionResponse",
    "RevokeSessionResponse",
]
