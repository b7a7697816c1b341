"""
Unit tests for Refresh Session Use Case
"""

from datetime import timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.sessions import RefreshSessionUseCase
from src.domain.errors import TokenCompromised, TokenNotFound


@pytest.fixture
def use_case(mock_uow):
    use_case = RefreshSessionUseCase(mock_uow, timedelta(days=14))
    use_case.manager = MagicMock()
    return use_case


@pytest.mark.asyncio
async def test_refresh_success(use_case, make_record, decode_access_token):
    """New refresh token is returned and the access token belongs to the session owner"""
    use_case.manager.rotate = AsyncMock(return_value="new-secret")
    use_case.manager.get_by_hash = AsyncMock(
        return_value=make_record("new-secret", user_id="user-42")
    )

    result = await use_case.execute("old-secret", ip_address="10.0.0.1")

    assert result.refresh_token == "new-secret"
    assert decode_access_token(result.access_token)["sub"] == "user-42"
    use_case.manager.rotate.assert_called_once_with("old-secret", ip_address="10.0.0.1")
    use_case.manager.get_by_hash.assert_called_once_with("new-secret")


@pytest.mark.asyncio
async def test_refresh_unknown_token(use_case):
    use_case.manager.rotate = AsyncMock(side_effect=TokenNotFound())
    use_case.manager.get_by_hash = AsyncMock()

    with pytest.raises(TokenNotFound):
        await use_case.execute("unknown")

    use_case.manager.get_by_hash.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_replayed_token(use_case):
    use_case.manager.rotate = AsyncMock(side_effect=TokenCompromised())

    with pytest.raises(TokenCompromised) as exc_info:
        await use_case.execute("spent")

    assert exc_info.value.code == "TOKEN_COMPROMISED"
