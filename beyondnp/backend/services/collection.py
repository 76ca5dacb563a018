"""
Collection Service.

Business logic for collections: per-owner unique names, the
collection detail view, and cascading deletes.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.exceptions import ConflictError
from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.collection import Collection
from beyondnp.backend.models.note import Note
from beyondnp.backend.repositories.collection import CollectionRepository
from beyondnp.backend.repositories.note import NoteRepository
from beyondnp.backend.schemas.collection import CollectionCreate, CollectionUpdate
from beyondnp.backend.services.base import OwnedService

DUPLICATE_NAME_MESSAGE = "Collection with this name already exists"


class CollectionService(OwnedService):
    """Service for the current user's collections."""

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)
        self.repo = CollectionRepository(session)
        self.notes = NoteRepository(session)

    async def list_collections(self) -> list[Collection]:
        """Active collections, most recently modified first."""
        return await self.repo.list_owned(self.user_id)

    async def list_archived(self) -> list[Collection]:
        """Archived collections, most recently modified first."""
        return await self.repo.list_owned(self.user_id, archived=True)

    async def get_collection(self, collection_id: str) -> Collection:
        """
        Raises:
            NotFoundError: If missing or owned by another user
        """
        return await self.repo.get_owned(collection_id, self.user_id)

    async def get_with_notes(self, collection_id: str) -> tuple[Collection, list[Note]]:
        """A collection and its active notes, pinned first, most recently modified first."""
        collection = await self.get_collection(collection_id)
        notes = await self.notes.list_in_collection(collection.id, self.user_id)
        return collection, notes

    async def create_collection(self, data: CollectionCreate) -> Collection:
        """
        Create a collection.

        Raises:
            ValidationError: If the name is missing
            ConflictError: If the user already has a collection with this name
        """
        self._validate_required(
            {"name": data.name},
            ["name"],
            message="Collection name is required",
        )
        if await self.repo.name_taken(self.user_id, data.name):
            raise ConflictError(DUPLICATE_NAME_MESSAGE)

        self._log_operation("Creating collection", name=data.name)

        collection = await self._execute_db_operation(
            "create_collection",
            self.repo.create(
                user_id=self.user_id,
                **data.model_dump(exclude_none=True),
            ),
        )

        self._log_debug("Collection created", collection_id=collection.id)
        return collection

    async def update_collection(
        self,
        collection_id: str,
        data: CollectionUpdate,
    ) -> Collection:
        """
        Apply the fields present in the payload.

        Raises:
            NotFoundError: If missing or owned by another user
            ConflictError: If renamed onto another collection's name
        """
        collection = await self.get_collection(collection_id)
        changes = data.changes()

        new_name = changes.get("name")
        if new_name is not None and new_name != collection.name:
            if await self.repo.name_taken(self.user_id, new_name, exclude_id=collection.id):
                raise ConflictError(DUPLICATE_NAME_MESSAGE)

        self._log_operation(
            "Updating collection",
            collection_id=collection.id,
            fields=list(changes.keys()),
        )

        return await self._execute_db_operation(
            "update_collection",
            self.repo.apply(collection, **changes, last_modified=utc_now()),
        )

    async def delete_collection(self, collection_id: str) -> int:
        """
        Delete a collection and every note in it.

        Notes go first, then the collection, inside the request's
        transaction.

        Returns:
            Number of notes deleted
        """
        collection = await self.get_collection(collection_id)

        self._log_operation("Deleting collection", collection_id=collection.id)

        deleted_notes = await self._execute_db_operation(
            "delete_collection_notes",
            self.notes.delete_in_collection(collection.id),
        )
        await self._execute_db_operation(
            "delete_collection",
            self.repo.remove(collection),
        )

        self._log_debug(
            "Collection deleted",
            collection_id=collection_id,
            notes_deleted=deleted_notes,
        )
        return deleted_notes
