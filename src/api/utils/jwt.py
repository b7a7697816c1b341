from datetime import UTC, datetime, timedelta

from jose import jwt

from config import ApplicationConfig


def mint_access_token(user_id: str) -> str:
    """
    Mint a short-lived access token for a session owner

    Args:
        user_id: Owner of the session (becomes the ``sub`` claim)

    Returns:
        JWT token string (HS256, ACCESS_TOKEN_MINUTES expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "exp": now + timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")
