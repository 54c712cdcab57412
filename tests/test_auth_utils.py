"""
Password hashing and token codec, without HTTP.
"""

import uuid
from datetime import timedelta
from types import SimpleNamespace

import pytest
from jose import JWTError, jwt

from synergysphere.auth.auth_utils import (
    create_access_token, decode_access_token, hash_password, verify_password,
)


def test_hash_and_verify():
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_against_malformed_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_only_first_72_bytes_count():
    base = "a" * 72
    hashed = hash_password(base + "tail-one")
    assert verify_password(base + "tail-two", hashed)


def test_token_round_trip_payload():
    user = SimpleNamespace(id=uuid.uuid4(), email="ann@example.com", full_name="Ann")
    payload = decode_access_token(create_access_token(user))
    assert payload["id"] == str(user.id)
    assert payload["email"] == "ann@example.com"
    assert payload["fullName"] == "Ann"
    assert "exp" in payload


def test_expired_and_tampered_tokens_are_rejected():
    user = SimpleNamespace(id=uuid.uuid4(), email="ann@example.com", full_name="Ann")

    with pytest.raises(JWTError):
        decode_access_token(create_access_token(user, expires_delta=timedelta(seconds=-1)))

    forged = jwt.encode({"id": str(user.id), "email": user.email, "fullName": "Ann"}, "other-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_access_token(forged)
