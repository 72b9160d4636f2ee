import pytest
from pydantic import ValidationError

from app.core.jwt import create_access_token, decode_token
from app.core.security import hash_password, verify_password
from app.schemas.user import UserCreate


def test_password_hash_and_verify():
    raw = "SuperSecurePass123!"
    hashed = hash_password(raw)
    assert hashed != raw
    assert verify_password(raw, hashed)
    assert not verify_password("wrong", hashed)


def test_verify_rejects_non_bcrypt_hash():
    assert not verify_password("secret", "plain-text-secret")


def test_verify_rejects_password_over_72_bytes():
    hashed = hash_password("secret123")
    assert not verify_password("a" * 80, hashed)


def test_registration_rejects_password_over_72_bytes():
    with pytest.raises(ValidationError):
        UserCreate(name="Long", email="long@example.com", password="a" * 73)
    # multi-byte characters count by their UTF-8 length
    with pytest.raises(ValidationError):
        UserCreate(name="Long", email="long@example.com", password="\u00e9" * 37)
    assert UserCreate(name="Edge", email="edge@example.com", password="a" * 72).password == "a" * 72


def test_issue_and_decode_token():
    token = create_access_token("42", expires_minutes=5)
    payload = decode_token(token)
    assert payload.get("sub") == "42"
    assert "exp" in payload


def test_expired_or_tampered_token_decodes_to_none():
    assert decode_token(create_access_token("42", expires_minutes=-1)) is None
    assert decode_token(create_access_token("42") + "x") is None
    assert decode_token("not-a-jwt") is None
