"""
Unit Tests for Security Module.

Black box tests against the public interface of security.py.
All cryptographic operations (bcrypt, JWT) execute for real.
Only the config boundary is stubbed with real Pydantic schema objects.
"""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from beyondnp.backend.core.config_schema import JwtSchema, VerificationSchema
from beyondnp.backend.core.exceptions import AuthenticationError
from beyondnp.backend.core.security import (
    create_access_token,
    create_user_token,
    decode_token,
    generate_verification_code,
    hash_password,
    verification_expiry,
    verify_password,
)
from beyondnp.backend.core.utils import utc_now

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-testing-purposes"


@pytest.fixture
def security_config():
    """Real Pydantic schemas with test values."""
    return SimpleNamespace(
        jwt=JwtSchema(
            algorithm="HS256",
            access_token_expire_minutes=30,
            audience="test-api",
        ),
        verification=VerificationSchema(code_length=6, code_expire_minutes=10),
    )


@pytest.fixture
def _stub_config(security_config):
    """Stub the config boundary so security functions can resolve settings."""
    settings = SimpleNamespace(jwt_secret=TEST_JWT_SECRET)
    app_config = SimpleNamespace(security=security_config)
    with (
        patch("beyondnp.backend.core.security.get_settings", return_value=settings),
        patch("beyondnp.backend.core.security.get_app_config", return_value=app_config),
    ):
        yield


# =============================================================================
# Password Hashing
# =============================================================================


class TestHashPassword:
    """Tests for password hashing, no mocks."""

    def test_returns_bcrypt_formatted_hash(self):
        result = hash_password("password123")
        assert result != "password123"
        assert result.startswith("$2b$")

    def test_same_password_produces_different_hashes(self):
        """Bcrypt salts each hash, so two calls must differ."""
        assert hash_password("identical") != hash_password("identical")


class TestVerifyPassword:
    """Tests for password verification, no mocks."""

    def test_correct_password_verifies(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert verify_password("correct-horse-battery-staple", hashed) is True

    def test_wrong_password_fails(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert verify_password("wrong-password", hashed) is False

    def test_unicode_password(self):
        password = "contraseña-पासवर्ड"
        assert verify_password(password, hash_password(password)) is True

    def test_password_over_bcrypt_limit_is_a_mismatch(self):
        hashed = hash_password("x" * 72)
        assert verify_password("x" * 100, hashed) is False

    def test_multibyte_password_over_bcrypt_limit_is_a_mismatch(self):
        hashed = hash_password("secret123")
        assert verify_password("é" * 40, hashed) is False


# =============================================================================
# Bearer Tokens
# =============================================================================


@pytest.mark.usefixtures("_stub_config")
class TestCreateAccessToken:
    """Tests for token creation and decoding, real JWT operations."""

    def test_user_token_carries_subject(self):
        payload = decode_token(create_user_token("user-42"))
        assert payload["sub"] == "user-42"
        assert payload["type"] == "access"
        assert payload["aud"] == "test-api"

    def test_custom_expiration_delta(self):
        short = create_access_token({"sub": "u"}, expires_delta=timedelta(minutes=5))
        long = create_access_token({"sub": "u"}, expires_delta=timedelta(hours=24))
        assert decode_token(long)["exp"] > decode_token(short)["exp"]

    def test_does_not_mutate_input_data(self):
        data = {"sub": "user-1"}
        create_access_token(data)
        assert data == {"sub": "user-1"}


@pytest.mark.usefixtures("_stub_config")
class TestDecodeToken:
    """Every decode failure is reported with one message."""

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError, match="Invalid or expired token"):
            decode_token("not-a-jwt-token")

    def test_tampered_token(self):
        token = create_user_token("user-1")
        with pytest.raises(AuthenticationError):
            decode_token(token[:-4] + "XXXX")

    def test_token_signed_with_wrong_secret(self):
        from jose import jwt as jose_jwt

        wrong_token = jose_jwt.encode(
            {"sub": "user-1", "aud": "test-api"},
            "completely-different-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(wrong_token)

    def test_token_for_other_audience(self):
        from jose import jwt as jose_jwt

        foreign = jose_jwt.encode(
            {"sub": "user-1", "aud": "someone-else"},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(foreign)

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(AuthenticationError, match="Invalid or expired token"):
            decode_token(token)


# =============================================================================
# Verification Codes
# =============================================================================


@pytest.mark.usefixtures("_stub_config")
class TestVerificationCodes:

    def test_code_is_six_digits(self):
        for _ in range(20):
            code = generate_verification_code()
            assert len(code) == 6
            assert code.isdigit()

    def test_expiry_is_ten_minutes_out(self):
        before = utc_now()
        expires = verification_expiry()
        assert timedelta(minutes=9) < expires - before <= timedelta(minutes=10, seconds=5)
