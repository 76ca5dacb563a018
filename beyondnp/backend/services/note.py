"""
Note Service.

Business logic layer for notes. Keeps every collection's notes counter
in step with note creates, deletes and moves.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.exceptions import NotFoundError, ValidationError
from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.collection import Collection
from beyondnp.backend.models.note import Note
from beyondnp.backend.repositories.collection import CollectionRepository
from beyondnp.backend.repositories.note import NoteRepository
from beyondnp.backend.schemas.note import NoteCreate, NoteUpdate
from beyondnp.backend.services.base import OwnedService


class NoteService(OwnedService):
    """
    Service for note business logic.

    Counter adjustments run as atomic UPDATE statements in the same
    transaction as the note write they accompany.
    """

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)
        self.repo = NoteRepository(session)
        self.collections = CollectionRepository(session)

    async def _target_collection(self, collection_id: str) -> Collection:
        try:
            return await self.collections.get_owned(collection_id, self.user_id)
        except NotFoundError:
            raise NotFoundError("Target collection not found")

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a note in one of the user's collections.

        Args:
            data: Note creation data

        Returns:
            Created note

        Raises:
            ValidationError: If title, content or collectionId is missing
            NotFoundError: If the collection is missing or not owned
        """
        self._validate_required(
            data.model_dump(),
            ["title", "content", "collection_id"],
            message="Please provide title, content and collection",
        )
        collection = await self.collections.get_owned(data.collection_id, self.user_id)

        self._log_operation("Creating note", title=data.title, collection_id=collection.id)

        fields = {
            "user_id": self.user_id,
            "parent_collection_id": collection.id,
            "title": data.title,
            "content": data.content,
            "tags": data.tags,
            "is_pinned": data.is_pinned,
            "attachments": [a.model_dump() for a in data.attachments],
        }
        if data.color is not None:
            fields["color"] = data.color

        note = await self._execute_db_operation("create_note", self.repo.create(**fields))
        await self._execute_db_operation(
            "increment_notes_count",
            self.collections.adjust_notes_count(collection.id, 1),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If missing or owned by another user
        """
        return await self.repo.get_owned(note_id, self.user_id)

    async def list_notes(self, collection_id: str | None = None) -> list[Note]:
        """
        List active notes, optionally only those of one collection.

        Returns:
            Notes pinned first, most recently modified first
        """
        return await self.repo.list_for_user(self.user_id, collection_id=collection_id)

    async def list_archived(self) -> list[Note]:
        return await self.repo.list_for_user(self.user_id, archived=True)

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Update an existing note.

        Only fields present in the payload are applied. A different
        collectionId moves the note and shifts one count from the old
        collection to the new one.

        Raises:
            NotFoundError: If the note or the target collection is missing
        """
        note = await self.get_note(note_id)
        changes = data.changes()

        target_id = changes.pop("collection_id", None)
        if target_id is not None and target_id != note.parent_collection_id:
            target = await self._target_collection(target_id)
            self._log_operation(
                "Moving note",
                note_id=note.id,
                from_collection=note.parent_collection_id,
                to_collection=target.id,
            )
            await self._execute_db_operation(
                "decrement_notes_count",
                self.collections.adjust_notes_count(note.parent_collection_id, -1),
            )
            await self._execute_db_operation(
                "increment_notes_count",
                self.collections.adjust_notes_count(target.id, 1),
            )
            changes["parent_collection_id"] = target.id

        self._log_operation(
            "Updating note",
            note_id=note.id,
            fields=list(changes.keys()),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.apply(note, **changes, last_modified=utc_now()),
        )

    async def delete_note(self, note_id: str) -> None:
        """
        Delete a note and decrement its collection's count.

        Raises:
            NotFoundError: If missing or owned by another user
        """
        note = await self.get_note(note_id)
        collection_id = note.parent_collection_id

        self._log_operation("Deleting note", note_id=note.id)

        await self._execute_db_operation("delete_note", self.repo.remove(note))
        await self._execute_db_operation(
            "decrement_notes_count",
            self.collections.adjust_notes_count(collection_id, -1),
        )

    async def search_notes(self, query: str | None) -> list[Note]:
        """
        Case-insensitive substring search over title, content and tags.

        Returns:
            Matching active notes, pinned first, then most recently modified

        Raises:
            ValidationError: If the query is missing or blank
        """
        if query is None or not query.strip():
            raise ValidationError("Please provide a search query")

        needle = query.strip()
        self._log_debug("Searching notes", query=needle)

        notes = await self.repo.list_by_activity(self.user_id)
        return [note for note in notes if note.matches(needle)]
