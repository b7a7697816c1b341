"""
Revoke Session Use Case

Handles explicit logout of a single session.
"""

from datetime import timedelta
from typing import Optional

from src.app.services.session_lifecycle_manager import SessionLifecycleManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RevocationReason
from .dtos import RevokeSessionResponse


class RevokeSessionUseCase:
    """
    Use case for revoking one refresh token.

    Business Rules:
    - Logging out twice is not an error
    - Other sessions of the user stay active
    """

    def __init__(self, uow: UnitOfWork, session_lifetime: timedelta):
        self.manager = SessionLifecycleManager(uow, session_lifetime)

    async def execute(
        self,
        refresh_token: str,
        reason: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> RevokeSessionResponse:
        revoked = await self.manager.revoke(
            refresh_token,
            reason=reason or RevocationReason.revoked_by_user.value,
            revoked_by_ip=ip_address,
        )

        if revoked:
            return RevokeSessionResponse(revoked=True, message="Session revoked successfully")
        return RevokeSessionResponse(
            revoked=False, message="Session not found or already revoked"
        )
