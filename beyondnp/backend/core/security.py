"""
Security Utilities.

Password hashing, bearer token minting/validation, and email
verification codes.

Tokens are stateless: there is no revocation list, so logging out is
purely the client discarding its token.
"""

import secrets
from datetime import datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from beyondnp.backend.core.config import get_app_config, get_settings
from beyondnp.backend.core.exceptions import AuthenticationError
from beyondnp.backend.core.logging import get_logger
from beyondnp.backend.core.utils import utc_now

logger = get_logger(__name__)


# bcrypt only hashes the first 72 bytes and rejects longer input
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    A password longer than bcrypt accepts can never have been stored,
    so it is reported as a mismatch.
    """
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": "access", "aud": jwt_config.audience})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def create_user_token(user_id: str) -> str:
    """Mint the bearer token handed out after login or email verification."""
    return create_access_token({"sub": user_id})


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")


def generate_verification_code() -> str:
    """Numeric email verification code, zero-padded to the configured length."""
    length = get_app_config().security.verification.code_length
    return str(secrets.randbelow(10**length)).zfill(length)


def verification_expiry() -> datetime:
    """Expiry timestamp for a code issued now."""
    minutes = get_app_config().security.verification.code_expire_minutes
    return utc_now() + timedelta(minutes=minutes)
