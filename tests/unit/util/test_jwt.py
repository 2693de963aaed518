"""Unit tests for session token helpers."""

import pytest

from forum.config import AuthSettings
from forum.util.jwt import JWTError, create_token, verify_token


class TestTokens:
    def test_round_trip_keeps_identity(self):
        settings = AuthSettings(jwt_secret="test-secret")

        payload = verify_token(create_token("u1", "a@example.com", settings), settings)

        assert payload.user_id == "u1"
        assert payload.email == "a@example.com"

    def test_token_signed_with_other_secret_is_rejected(self):
        token = create_token("u1", "a@example.com", AuthSettings(jwt_secret="one"))

        with pytest.raises(JWTError):
            verify_token(token, AuthSettings(jwt_secret="two"))

    def test_expired_token_is_rejected(self):
        settings = AuthSettings(jwt_secret="test-secret", jwt_expiry_days=-1)
        token = create_token("u1", "a@example.com", settings)

        with pytest.raises(JWTError):
            verify_token(token, settings)
