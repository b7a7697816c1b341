"""
Issue Session Use Case

Starts a session for a user the upstream auth flow has already verified.
"""

from datetime import timedelta
from typing import Optional

from src.api.utils.jwt import mint_access_token
from src.app.services.session_lifecycle_manager import SessionLifecycleManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import IssueSessionResponse


class IssueSessionUseCase:
    """
    Use case for issuing a session secret and its first access token.

    Business Rules:
    - Password verification happens before this use case, never inside it
    - The refresh token is persisted before any access token is minted
    """

    def __init__(self, uow: UnitOfWork, session_lifetime: timedelta):
        self.manager = SessionLifecycleManager(uow, session_lifetime)

    async def execute(
        self, user_id: str, ip_address: Optional[str] = None
    ) -> IssueSessionResponse:
        refresh_token = await self.manager.issue(user_id, created_by_ip=ip_address)
        record = await self.manager.get_by_hash(refresh_token)

        return IssueSessionResponse(
            access_token=mint_access_token(user_id),
            refresh_token=refresh_token,
            refresh_expires_at=record.expires_at,
        )
