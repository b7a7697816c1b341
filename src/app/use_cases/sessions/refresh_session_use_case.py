"""
Refresh Session Use Case

Handles access token refresh with refresh token rotation and reuse detection.
"""

from datetime import timedelta
from typing import Optional

from src.api.utils.jwt import mint_access_token
from src.app.services.session_lifecycle_manager import SessionLifecycleManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RefreshSessionResponse


class RefreshSessionUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token rotation: old token spent, new token issued
    - Replaying a spent or expired token logs the user out everywhere
    - Access token is minted for the owner of the new session
    """

    def __init__(self, uow: UnitOfWork, session_lifetime: timedelta):
        self.manager = SessionLifecycleManager(uow, session_lifetime)

    async def execute(
        self, refresh_token: str, ip_address: Optional[str] = None
    ) -> RefreshSessionResponse:
        """
        Execute refresh session use case.

        Args:
            refresh_token: The refresh token to rotate
            ip_address: Client address, advisory only

        Returns:
            RefreshSessionResponse with a new access token and refresh token

        Raises:
            TokenNotFound, TokenCompromised, StorageError
        """
        new_refresh_token = await self.manager.rotate(refresh_token, ip_address=ip_address)

        # Owner lookup goes through the store, never through a cached record
        record = await self.manager.get_by_hash(new_refresh_token)

        return RefreshSessionResponse(
            access_token=mint_access_token(record.user_id),
            refresh_token=new_refresh_token,
        )
