"""
Tests for session token issue and verification.
"""
from datetime import timedelta

import pytest
from jose import jwt as jose_jwt

from app.core.security.jwt import create_access_token, verify_token


class TestSessionTokens:

    def test_claims(self) -> None:
        token = create_access_token(user_id="u-1", email="a@b.co", role="admin")
        claims = verify_token(token)
        assert claims["sub"] == "u-1"
        assert claims["userId"] == "u-1"
        assert claims["email"] == "a@b.co"
        assert claims["role"] == "admin"

    def test_default_expiry_is_seven_days(self) -> None:
        claims = verify_token(create_access_token(user_id="u-1", email="a@b.co"))
        assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60
        assert claims["role"] == "user"

    def test_expired(self) -> None:
        token = create_access_token(user_id="u-1", email="a@b.co", expires_delta=timedelta(minutes=-1))
        with pytest.raises(ValueError, match="expirado"):
            verify_token(token)

    def test_wrong_signature(self) -> None:
        forged = jose_jwt.encode({"sub": "u-1", "userId": "u-1"}, "other-secret", algorithm="HS256")
        with pytest.raises(ValueError, match="invalido"):
            verify_token(forged)

    @pytest.mark.parametrize("token", ["", "abc", "a.b"])
    def test_malformed(self, token: str) -> None:
        with pytest.raises(ValueError):
            verify_token(token)
