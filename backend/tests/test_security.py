from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from backend.app.core.security import create_access_token, decode_access_token, hash_password, verify_password

SECRET = "unit-test-secret-key-long-enough-for-hs256"


def test_password_hash_verifies_only_the_original_password() -> None:
    hashed = hash_password("pw123", rounds=4)

    assert hashed != "pw123"
    assert verify_password("pw123", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_rejects_malformed_hash() -> None:
    assert not verify_password("pw123", "not-a-bcrypt-hash")


def test_access_token_round_trip_and_expiry_window() -> None:
    issued_at = datetime.now(timezone.utc)
    token = create_access_token("user-1", SECRET, ttl=timedelta(hours=24), now=issued_at)

    assert decode_access_token(token, SECRET) == "user-1"
    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_expired_token_is_rejected() -> None:
    token = create_access_token("user-1", SECRET, now=datetime.now(timezone.utc) - timedelta(hours=25))

    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token, SECRET)


def test_token_signed_with_another_key_is_rejected() -> None:
    token = create_access_token("user-1", "another-secret-key-that-is-also-long-enough")

    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token(token, SECRET)


def test_token_without_subject_is_rejected() -> None:
    token = jwt.encode({"exp": datetime.now(timezone.utc) + timedelta(minutes=5)}, SECRET, algorithm="HS256")

    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token(token, SECRET)
