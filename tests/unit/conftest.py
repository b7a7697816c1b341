from datetime import datetime, timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.token_codec import hash_secret
from src.domain.entities import SessionRecord

FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def make_record():
    def _make(secret: str = "secret", **overrides) -> SessionRecord:
        values = dict(
            user_id="user-1",
            secret_hash=hash_secret(secret),
            created_at=FIXED_NOW - timedelta(days=1),
            expires_at=FIXED_NOW + timedelta(days=13),
        )
        values.update(overrides)
        return SessionRecord(**values)

    return _make


@pytest.fixture
def fixed_now():
    return FIXED_NOW
