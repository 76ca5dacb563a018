"""
Base Repository.

Base classes for all repositories with common CRUD operations.

`OwnedRepository` adds the ownership scope shared by collections, notes
and documents: every lookup is filtered by the requesting user, and a row
owned by someone else is reported exactly like a missing row.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.exceptions import NotFoundError
from beyondnp.backend.core.logging import get_logger
from beyondnp.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class UserRepository(BaseRepository[User]):
            model = User
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @property
    def label(self) -> str:
        """Human-readable model name used in NotFound messages."""
        return self.model.__name__

    async def get_by_id(self, id: str) -> ModelType:
        """
        Get a single record by ID.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id_or_none(id)

        if instance is None:
            raise NotFoundError(f"{self.label} not found")

        return instance

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def apply(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """Set the given attributes on a loaded record and flush."""
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def remove(self, instance: ModelType) -> None:
        """Delete a loaded record."""
        await self.session.delete(instance)
        await self.session.flush()

    async def exists(self, id: str) -> bool:
        """Check if a record exists by ID."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none() is not None


class OwnedRepository(BaseRepository[ModelType]):
    """
    Repository for models carrying `user_id` and `is_archived`.

    Subclasses set `model` and may override `default_order` to control how
    listings are sorted.
    """

    def default_order(self) -> list[Any]:
        return [self.model.created_at.desc()]

    async def get_owned(self, id: str, user_id: str) -> ModelType:
        """
        Get a record by ID, scoped to its owner.

        Raises:
            NotFoundError: If the record is missing or belongs to another user
        """
        result = await self.session.execute(
            select(self.model).where(
                self.model.id == str(id),
                self.model.user_id == user_id,
            )
        )
        instance = result.scalar_one_or_none()

        if instance is None:
            raise NotFoundError(f"{self.label} not found")

        return instance

    async def list_owned(
        self,
        user_id: str,
        *criteria: ColumnElement[bool],
        archived: bool = False,
        limit: int | None = None,
        order_by: list[Any] | None = None,
    ) -> list[ModelType]:
        """List a user's records, optionally narrowed by extra criteria."""
        stmt = (
            select(self.model)
            .where(
                self.model.user_id == user_id,
                self.model.is_archived == archived,
                *criteria,
            )
            .order_by(*(order_by or self.default_order()))
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_owned(
        self,
        user_id: str,
        *criteria: ColumnElement[bool],
        archived: bool = False,
    ) -> int:
        """Count a user's records matching the criteria."""
        result = await self.session.execute(
            select(func.count())
            .select_from(self.model)
            .where(
                self.model.user_id == user_id,
                self.model.is_archived == archived,
                *criteria,
            )
        )
        return result.scalar_one()

    async def delete_all_owned(self, user_id: str) -> int:
        """Delete every record a user owns, archived or not. Returns row count."""
        result = await self.session.execute(
            delete(self.model).where(self.model.user_id == user_id)
        )
        return result.rowcount
