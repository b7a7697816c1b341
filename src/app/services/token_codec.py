"""
Secure Token Codec

Generates opaque session secrets and the digest used to look them up.
"""

import hashlib
import secrets

# 32 random bytes = 256 bits of entropy
SECRET_BYTES = 32


def generate_secret() -> str:
    """
    Generate a new session secret.

    Returns:
        URL-safe base64 string without padding, safe for cookies and URLs
    """
    return secrets.token_urlsafe(SECRET_BYTES)


def hash_secret(secret: str) -> str:
    """
    Compute the storage key for a secret.

    Deterministic SHA-256 of the UTF-8 secret, used as the lookup key.

    Returns:
        64-character lowercase hex digest
    """
    return hashlib.sha256(secret.encode()).hexdigest()
