"""
Unit Tests for Note Service.

Tests the NoteService business logic with mocked repositories.
"""

from unittest.mock import AsyncMock, MagicMock, call

import pytest

from beyondnp.backend.core.exceptions import NotFoundError, ValidationError
from beyondnp.backend.models.note import Note
from beyondnp.backend.schemas.note import NoteCreate, NoteUpdate
from beyondnp.backend.services.note import NoteService

USER_ID = "user-1"


@pytest.fixture
def service(mock_db_session):
    """NoteService with mocked repositories."""
    service = NoteService(mock_db_session, USER_ID)
    service.repo = MagicMock()
    service.repo.create = AsyncMock()
    service.repo.apply = AsyncMock(side_effect=lambda note, **changes: note)
    service.repo.remove = AsyncMock()
    service.repo.get_owned = AsyncMock()
    service.repo.list_by_activity = AsyncMock(return_value=[])
    service.collections = MagicMock()
    service.collections.get_owned = AsyncMock()
    service.collections.adjust_notes_count = AsyncMock()
    return service


def _collection(collection_id: str) -> MagicMock:
    collection = MagicMock()
    collection.id = collection_id
    return collection


def _note(note_id: str = "note-1", collection_id: str = "col-1") -> MagicMock:
    note = MagicMock()
    note.id = note_id
    note.parent_collection_id = collection_id
    return note


class TestNoteServiceCreate:
    """Tests for note creation."""

    async def test_create_note_increments_collection_count(self, service):
        service.collections.get_owned.return_value = _collection("col-1")
        service.repo.create.return_value = _note()

        data = NoteCreate(title="SOP", content="First draft", collection_id="col-1", tags=["sop"])
        result = await service.create_note(data)

        assert result.id == "note-1"
        service.collections.get_owned.assert_awaited_once_with("col-1", USER_ID)
        kwargs = service.repo.create.call_args.kwargs
        assert kwargs["user_id"] == USER_ID
        assert kwargs["parent_collection_id"] == "col-1"
        assert kwargs["tags"] == ["sop"]
        assert "color" not in kwargs
        service.collections.adjust_notes_count.assert_awaited_once_with("col-1", 1)

    @pytest.mark.parametrize(
        "payload",
        [
            {"content": "body", "collectionId": "col-1"},
            {"title": "SOP", "collectionId": "col-1"},
            {"title": "SOP", "content": "body"},
            {"title": "  ", "content": "body", "collectionId": "col-1"},
        ],
    )
    async def test_create_note_requires_title_content_and_collection(self, service, payload):
        with pytest.raises(ValidationError, match="Please provide title, content and collection"):
            await service.create_note(NoteCreate.model_validate(payload))

        service.repo.create.assert_not_awaited()
        service.collections.adjust_notes_count.assert_not_awaited()

    async def test_create_note_in_foreign_collection_is_not_found(self, service):
        service.collections.get_owned.side_effect = NotFoundError("Collection not found")

        with pytest.raises(NotFoundError, match="Collection not found"):
            await service.create_note(
                NoteCreate(title="SOP", content="body", collection_id="someone-elses")
            )

        service.repo.create.assert_not_awaited()


class TestNoteServiceUpdate:
    """Tests for updating and moving notes."""

    async def test_move_shifts_count_between_collections(self, service):
        note = _note(collection_id="col-1")
        service.repo.get_owned.return_value = note
        service.collections.get_owned.return_value = _collection("col-2")

        await service.update_note("note-1", NoteUpdate(collection_id="col-2"))

        assert service.collections.adjust_notes_count.await_args_list == [
            call("col-1", -1),
            call("col-2", 1),
        ]
        changes = service.repo.apply.call_args.kwargs
        assert changes["parent_collection_id"] == "col-2"
        assert "collection_id" not in changes
        assert "last_modified" in changes

    async def test_same_collection_is_not_a_move(self, service):
        service.repo.get_owned.return_value = _note(collection_id="col-1")

        await service.update_note("note-1", NoteUpdate(collection_id="col-1", title="New"))

        service.collections.adjust_notes_count.assert_not_awaited()
        assert service.repo.apply.call_args.kwargs["title"] == "New"

    async def test_missing_target_collection(self, service):
        service.repo.get_owned.return_value = _note(collection_id="col-1")
        service.collections.get_owned.side_effect = NotFoundError("Collection not found")

        with pytest.raises(NotFoundError, match="Target collection not found"):
            await service.update_note("note-1", NoteUpdate(collection_id="missing"))

        service.collections.adjust_notes_count.assert_not_awaited()
        service.repo.apply.assert_not_awaited()

    async def test_only_sent_fields_are_applied(self, service):
        service.repo.get_owned.return_value = _note()

        await service.update_note("note-1", NoteUpdate(is_pinned=False, content=None))

        changes = service.repo.apply.call_args.kwargs
        assert changes["is_pinned"] is False
        assert changes["content"] is None
        assert "title" not in changes
        assert "tags" not in changes


class TestNoteServiceDelete:

    async def test_delete_decrements_parent_collection(self, service):
        note = _note(collection_id="col-7")
        service.repo.get_owned.return_value = note

        await service.delete_note("note-1")

        service.repo.remove.assert_awaited_once_with(note)
        service.collections.adjust_notes_count.assert_awaited_once_with("col-7", -1)

    async def test_delete_unknown_note(self, service):
        service.repo.get_owned.side_effect = NotFoundError("Note not found")

        with pytest.raises(NotFoundError, match="Note not found"):
            await service.delete_note("missing")

        service.collections.adjust_notes_count.assert_not_awaited()


class TestNoteServiceSearch:

    @pytest.mark.parametrize("query", [None, "", "   "])
    async def test_blank_query_is_rejected(self, service, query):
        with pytest.raises(ValidationError, match="Please provide a search query"):
            await service.search_notes(query)

    async def test_matches_title_content_and_tags(self, service):
        notes = [
            Note(title="Harvard essay", content="", tags=[]),
            Note(title="Budget", content="Essay fee is $75", tags=[]),
            Note(title="Misc", content=None, tags=["ESSAYS"]),
            Note(title="Visa", content="Interview prep", tags=["f1"]),
        ]
        service.repo.list_by_activity.return_value = notes

        result = await service.search_notes("  essay ")

        assert result == notes[:3]
        service.repo.list_by_activity.assert_awaited_once_with(USER_ID)
