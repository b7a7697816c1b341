"""
Session Use Case DTOs (Data Transfer Objects)

Response classes for the session domain.
"""

from datetime import datetime

from pydantic import BaseModel


class IssueSessionResponse(BaseModel):
    """Response for issue session use case"""

    access_token: str
    refresh_token: str
    refresh_expires_at: datetime


class RefreshSessionResponse(BaseModel):
    """Response for refresh session use case"""

    access_token: str
    refresh_token: str


class RevokeSessionResponse(BaseModel):
    """Response for revoke session use case"""

    revoked: bool
    message: str
