"""
FastAPI Dependencies.

Shared dependencies for request handling: the database session and
bearer-token authentication.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.database import get_db_session
from beyondnp.backend.core.exceptions import AuthenticationError, AuthorizationError
from beyondnp.backend.core.logging import get_logger
from beyondnp.backend.core.security import decode_token
from beyondnp.backend.models.user import User
from beyondnp.backend.repositories.user import UserRepository

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    db: DbSession,
    authorization: str | None = Header(None),
) -> User:
    """
    Resolve the bearer token to a verified user.

    Raises:
        AuthenticationError: Missing, malformed, invalid or expired token,
            or a token for a user that no longer exists
        AuthorizationError: The user has not verified their email
    """
    token = _bearer_token(authorization)
    if token is None:
        raise AuthenticationError("Not authorized, no token")

    payload = decode_token(token)
    user_id = payload.get("sub")
    user = await UserRepository(db).get_by_id_or_none(user_id) if user_id else None
    if user is None:
        raise AuthenticationError("Not authorized, user not found")

    if not user.is_email_verified:
        raise AuthorizationError("Please verify your email before accessing this resource")

    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
