import pytest
from jose import jwt

from config import ApplicationConfig


@pytest.fixture
def decode_access_token():
    """Decode an access token minted by the service"""

    def _decode(token: str) -> dict:
        return jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"])

    return _decode
