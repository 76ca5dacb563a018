"""
University Service.

Read access to the global catalog, plus adding entries.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.models.university import University
from beyondnp.backend.repositories.university import UniversityRepository
from beyondnp.backend.schemas.university import UniversityCreate
from beyondnp.backend.services.base import BaseService


class UniversityService(BaseService):
    """Service for the university catalog. Entries are not owned by anyone."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UniversityRepository(session)

    async def list_universities(
        self,
        query: str | None = None,
        state: str | None = None,
    ) -> list[University]:
        return await self.repo.search(query=query, state=state)

    async def get_university(self, university_id: str) -> University:
        """
        Raises:
            NotFoundError: If no university has this ID
        """
        return await self.repo.get_by_id(university_id)

    async def create_university(self, data: UniversityCreate) -> University:
        self._log_operation("Adding university", name=data.name)

        university = await self._execute_db_operation(
            "create_university",
            self.repo.create(**data.model_dump()),
        )

        self._log_debug("University added", university_id=university.id)
        return university
