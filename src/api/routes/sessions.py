import asyncio
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, Error, ServerError
from src.api.utils.internal_auth import verify_internal_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    IssueSessionResponse,
    IssueSessionUseCase,
    RefreshSessionResponse,
    RefreshSessionUseCase,
    RevokeSessionResponse,
    RevokeSessionUseCase,
)
from src.depends import get_session_lifetime, get_unit_of_work
from src.domain.errors import StorageError, TokenCompromised, TokenNotFound

router = APIRouter(prefix="/sessions", tags=["Sessions"])


async def run_with_deadline(coro):
    """Run a session operation under the configured deadline"""
    try:
        return await asyncio.wait_for(
            coro, timeout=ApplicationConfig.SESSION_OPERATION_TIMEOUT_SECONDS
        )
    except asyncio.TimeoutError:
        raise ServerError(
            Error("TIMEOUT", "Session operation timed out"),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    except StorageError as exc:
        raise ServerError(exc)


def client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


class IssueSessionRequest(BaseModel):
    """Issue session HTTP request payload"""

    user_id: str = Field(
        ..., min_length=1, max_length=255, description="Already authenticated user ID"
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=IssueSessionResponse,
    dependencies=[Depends(verify_internal_api_key)],
)
async def issue_session(
    body: IssueSessionRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_lifetime: timedelta = Depends(get_session_lifetime),
):
    """
    Issue Session

    Called by the upstream auth flow after it has verified the user's
    password. Returns the first access token and refresh token.

    Raises:
        - 401 Unauthorized: Missing or invalid internal API key
        - 500 Internal Server Error: Storage failure
        - 503 Service Unavailable: Deadline exceeded
    """
    use_case = IssueSessionUseCase(uow, session_lifetime)
    return await run_with_deadline(use_case.execute(body.user_id, client_ip(request)))


class RefreshRequest(BaseModel):
    """Refresh token HTTP request payload"""

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshSessionResponse)
async def refresh(
    body: RefreshRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_lifetime: timedelta = Depends(get_session_lifetime),
):
    """
    Refresh Session

    Rotates the refresh token and mints a new access token.

    Raises:
        - 401 Unauthorized: INVALID_TOKEN (unknown token) or TOKEN_COMPROMISED
          (spent/expired token replayed; all sessions of the user were revoked)
        - 500 Internal Server Error: Storage failure
        - 503 Service Unavailable: Deadline exceeded
    """
    use_case = RefreshSessionUseCase(uow, session_lifetime)
    try:
        return await run_with_deadline(
            use_case.execute(body.refresh_token, client_ip(request))
        )
    except (TokenNotFound, TokenCompromised) as exc:
        raise ClientError(exc, status_code=status.HTTP_401_UNAUTHORIZED)


class RevokeRequest(BaseModel):
    """Revoke token HTTP request payload"""

    refresh_token: str = Field(..., description="Refresh token to revoke")
    reason: Optional[str] = Field(
        None, max_length=255, description="Revocation reason (default: Revoked by user)"
    )


@router.post("/revoke", status_code=status.HTTP_200_OK, response_model=RevokeSessionResponse)
async def revoke(
    body: RevokeRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_lifetime: timedelta = Depends(get_session_lifetime),
):
    """
    Revoke Session (logout)

    Idempotent: revoking an unknown or already revoked token returns
    ``revoked: false`` rather than an error.

    Raises:
        - 500 Internal Server Error: Storage failure
        - 503 Service Unavailable: Deadline exceeded
    """
    use_case = RevokeSessionUseCase(uow, session_lifetime)
    return await run_with_deadline(
        use_case.execute(body.refresh_token, body.reason, client_ip(request))
    )
