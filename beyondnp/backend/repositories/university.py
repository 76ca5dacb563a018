"""
University Repository.

Data access layer for the global university catalog.
"""

from sqlalchemy import or_, select

from beyondnp.backend.models.university import University
from beyondnp.backend.repositories.base import BaseRepository


class UniversityRepository(BaseRepository[University]):
    """Repository for University model."""

    model = University

    async def search(
        self,
        query: str | None = None,
        state: str | None = None,
    ) -> list[University]:
        """
        List catalog entries, optionally filtered.

        Args:
            query: Case-insensitive substring of name or location
            state: Exact state match

        Returns:
            Universities ordered by ranking (unranked last), then name
        """
        stmt = select(University)
        if query:
            pattern = f"%{query}%"
            stmt = stmt.where(
                or_(
                    University.name.ilike(pattern),
                    University.location.ilike(pattern),
                )
            )
        if state:
            stmt = stmt.where(University.state == state)

        stmt = stmt.order_by(University.ranking.asc().nulls_last(), University.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
