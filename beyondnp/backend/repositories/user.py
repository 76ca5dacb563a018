"""
User Repository.

Data access layer for user accounts.
"""

from sqlalchemy import select

from beyondnp.backend.models.user import User
from beyondnp.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User model.

    The shortlist is the `shortlisted_universities` relationship; it is
    edited in place and written on flush.
    """

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by normalized email."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        """Check whether another account already uses this email."""
        existing = await self.get_by_email(email)
        if existing is None:
            return False
        return existing.id != exclude_id
