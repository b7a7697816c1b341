"""
Use Cases

Organized into domain folders:
- sessions/: Session lifecycle flows
"""

from .sessions import (
    IssueSessionUseCase,
    RefreshSessionUseCase,
    RevokeSessionUseCase,
)

__all__ = [
    "IssueSessionUseCase",
    "RefreshSessionUseCase",
    "RevokeSessionUseCase",
]
