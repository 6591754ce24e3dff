"""Tests for password hashing and bearer tokens."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from core.errors import Forbidden, TokenExpired, TokenInvalid, Unauthenticated
from core.security import PasswordHasher, TokenService


SECRET = "unit-secret"


class TestPasswordHasher:

    def test_hash_is_salted_and_verifiable(self):
        hasher = PasswordHasher(rounds=4)
        first = hasher.hash("pw123")
        second = hasher.hash("pw123")

        assert first != "pw123"
        assert first != second
        assert hasher.verify("pw123", first)
        assert not hasher.verify("wrong", first)

    def test_uses_configured_cost(self):
        hasher = PasswordHasher(rounds=5)
        assert hasher.hash("pw123").startswith("$2b$05$")


class TestTokenService:

    def test_issue_then_verify_returns_user_id(self):
        tokens = TokenService(SECRET)
        assert tokens.verify(tokens.issue(42)) == 42

    def test_token_expires_after_one_hour(self):
        tokens = TokenService(SECRET)
        payload = jwt.decode(tokens.issue(1), SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 3600

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token_is_unauthenticated(self, token):
        with pytest.raises(Unauthenticated):
            TokenService(SECRET).verify(token)

    def test_malformed_token_is_invalid(self):
        with pytest.raises(TokenInvalid):
            TokenService(SECRET).verify("not-a-jwt")

    def test_wrong_secret_is_invalid(self):
        token = TokenService("other-secret").issue(1)
        with pytest.raises(TokenInvalid):
            TokenService(SECRET).verify(token)

    def test_expired_token_is_rejected(self):
        two_hours_ago = datetime.now(timezone.utc) - timedelta(hours=2)
        token = TokenService(SECRET, clock=lambda: two_hours_ago).issue(1)

        with pytest.raises(TokenExpired) as exc_info:
            TokenService(SECRET).verify(token)
        assert isinstance(exc_info.value, Forbidden)

    def test_non_numeric_subject_is_invalid(self):
        expire = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": "ethan", "exp": expire}, SECRET, algorithm="HS256")
        with pytest.raises(TokenInvalid):
            TokenService(SECRET).verify(token)

    def test_missing_subject_is_invalid(self):
        expire = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"exp": expire}, SECRET, algorithm="HS256")
        with pytest.raises(TokenInvalid):
            TokenService(SECRET).verify(token)
