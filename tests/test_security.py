"""Tests for password hashing and bearer token verification."""
from datetime import timedelta

import pytest
from freezegun import freeze_time
from jose import jwt

from agroconnect.core.security import (
    CallerIdentity,
    authenticate,
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from agroconnect.error_handlers import AuthenticationError


class TestPasswordHashing:
    """Tests for bcrypt hashing."""

    def test_hash_is_not_the_password(self, settings):
        hashed = get_password_hash("harvest-2024", settings)

        assert hashed != "harvest-2024"
        assert verify_password("harvest-2024", hashed, settings)

    def test_wrong_password_rejected(self, settings):
        hashed = get_password_hash("harvest-2024", settings)
        assert not verify_password("Harvest-2024", hashed, settings)

    def test_hashes_are_salted(self, settings):
        assert get_password_hash("same", settings) != get_password_hash("same", settings)


class TestAuthenticate:
    """Tests for turning a bearer token into a caller identity."""

    def test_valid_token(self, settings):
        token = create_access_token("user-1", "ama@example.com", settings)

        assert authenticate(token, settings) == CallerIdentity(id="user-1", email="ama@example.com")

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, settings, token):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(token, settings)

        assert exc_info.value.reason == AuthenticationError.MISSING
        assert exc_info.value.status_code == 401

    def test_garbage_token(self, settings):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate("not.a.token", settings)

        assert exc_info.value.reason == AuthenticationError.INVALID
        assert exc_info.value.status_code == 403

    def test_token_signed_with_other_secret(self, settings):
        forged_settings = settings.model_copy(update={"jwt_secret_key": "someone-elses-secret"})
        token = create_access_token("user-1", "ama@example.com", forged_settings)

        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(token, settings)

        assert exc_info.value.reason == AuthenticationError.INVALID

    def test_expired_token(self, settings):
        """Test that a token is rejected once its lifetime has passed."""
        with freeze_time("2025-01-15 09:00:00"):
            token = create_access_token("user-1", "ama@example.com", settings)

        with freeze_time("2025-01-16 09:00:01"):
            with pytest.raises(AuthenticationError) as exc_info:
                authenticate(token, settings)

        assert exc_info.value.reason == AuthenticationError.EXPIRED
        assert exc_info.value.status_code == 403

    def test_token_valid_until_expiry(self, settings):
        with freeze_time("2025-01-15 09:00:00") as frozen:
            token = create_access_token("user-1", "ama@example.com", settings)
            frozen.tick(timedelta(hours=23))

            assert authenticate(token, settings).id == "user-1"

    def test_token_without_email_rejected(self, settings):
        token = jwt.encode({"sub": "user-1", "type": "access"}, settings.jwt_secret_key,
                           algorithm=settings.jwt_algorithm)

        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(token, settings)

        assert exc_info.value.reason == AuthenticationError.INVALID

    def test_refresh_style_token_rejected(self, settings):
        token = create_access_token(
            "user-1", "ama@example.com", settings, additional_claims={"type": "refresh"}
        )

        with pytest.raises(AuthenticationError):
            authenticate(token, settings)

    def test_claims(self, settings):
        token = create_access_token("user-1", "ama@example.com", settings)

        payload = decode_token(token, settings)

        assert payload["sub"] == "user-1"
        assert payload["email"] == "ama@example.com"
        assert payload["type"] == "access"
        assert payload["exp"] - payload["iat"] == settings.jwt_access_token_expire_minutes * 60
