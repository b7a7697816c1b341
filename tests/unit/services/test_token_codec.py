"""
Unit tests for the Secure Token Codec
"""

import hashlib
import re

from src.app.services.token_codec import generate_secret, hash_secret


def test_generate_secret_is_url_safe():
    secret = generate_secret()

    assert re.fullmatch(r"[A-Za-z0-9_-]+", secret)
    assert "=" not in secret


def test_generate_secret_carries_256_bits():
    # 32 bytes base64url-encoded without padding
    assert len(generate_secret()) == 43


def test_generate_secret_is_unique():
    secrets_seen = {generate_secret() for _ in range(200)}

    assert len(secrets_seen) == 200


def test_hash_secret_is_deterministic_sha256():
    secret = "abc"

    assert hash_secret(secret) == hash_secret(secret)
    assert hash_secret(secret) == hashlib.sha256(b"abc").hexdigest()
    assert len(hash_secret(secret)) == 64


def test_hash_secret_never_equals_input():
    secret = generate_secret()

    assert hash_secret(secret) != secret
    assert secret not in hash_secret(secret)
