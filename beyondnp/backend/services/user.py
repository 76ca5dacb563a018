"""
User Service.

Account management for the authenticated user: profile, password,
university shortlist, owned-record listings, account deletion and the
dashboard summary.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.exceptions import ConflictError, ValidationError
from beyondnp.backend.core.security import hash_password, verify_password
from beyondnp.backend.models.collection import Collection
from beyondnp.backend.models.document import Document, DocumentStatus
from beyondnp.backend.models.note import Note
from beyondnp.backend.models.university import University
from beyondnp.backend.models.user import User
from beyondnp.backend.repositories.collection import CollectionRepository
from beyondnp.backend.repositories.document import DocumentRepository
from beyondnp.backend.repositories.note import NoteRepository
from beyondnp.backend.repositories.university import UniversityRepository
from beyondnp.backend.repositories.user import UserRepository
from beyondnp.backend.schemas.user import ChangePasswordRequest, UserUpdate
from beyondnp.backend.services.base import BaseService

RECENT_ACTIVITY_LIMIT = 5


@dataclass
class OwnedRecords:
    collections: list[Collection]
    notes: list[Note]
    documents: list[Document]


@dataclass
class ActivityCounts:
    shortlisted_universities: int
    collections: int
    notes: int
    documents: int
    pending_documents: int
    completed_documents: int


@dataclass
class Dashboard:
    counts: ActivityCounts
    recent: OwnedRecords


class UserService(BaseService):
    """
    Service for the current user's account.

    Works on the User instance resolved by the auth dependency, which is
    bound to the same session.
    """

    def __init__(self, session: AsyncSession, user: User) -> None:
        super().__init__(session)
        self.user = user
        self.repo = UserRepository(session)
        self.universities = UniversityRepository(session)
        self.collections = CollectionRepository(session)
        self.notes = NoteRepository(session)
        self.documents = DocumentRepository(session)

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def list_collections(self) -> list[Collection]:
        """Active collections, most recently modified first."""
        return await self.collections.list_owned(self.user.id)

    async def list_notes(self) -> list[Note]:
        """Active notes, pinned first, then most recently modified."""
        return await self.notes.list_by_activity(self.user.id)

    async def list_documents(
        self,
        status: str | None = None,
        category: str | None = None,
    ) -> list[Document]:
        """Active documents, soonest due first, undated last."""
        return await self.documents.list_for_user(
            self.user.id,
            status=status,
            category=category,
        )

    async def owned_records(self) -> OwnedRecords:
        """The user's active collections, notes and documents."""
        return OwnedRecords(
            collections=await self.list_collections(),
            notes=await self.list_notes(),
            documents=await self.list_documents(),
        )

    async def update_profile(self, data: UserUpdate) -> User:
        """
        Apply the fields present in the payload.

        `profile` and `preferences` are merged one level deep: keys sent
        replace the stored keys, the rest are kept.

        Raises:
            ConflictError: If the new email belongs to another account
        """
        changes: dict = {}
        sent = data.model_fields_set

        if "name" in sent:
            changes["name"] = data.name.strip()

        if "email" in sent and data.email != self.user.email:
            if await self.repo.email_taken(data.email, exclude_id=self.user.id):
                raise ConflictError("Email is already in use")
            changes["email"] = data.email

        if data.profile is not None:
            changes["profile"] = {
                **self.user.profile,
                **data.profile.model_dump(mode="json", by_alias=True, exclude_unset=True),
            }

        if data.preferences is not None:
            changes["preferences"] = {
                **self.user.preferences,
                **data.preferences.model_dump(mode="json", by_alias=True, exclude_unset=True),
            }

        self._log_operation(
            "Updating profile",
            user_id=self.user.id,
            fields=list(changes.keys()),
        )

        return await self._execute_db_operation(
            "update_profile",
            self.repo.apply(self.user, **changes),
        )

    async def change_password(self, data: ChangePasswordRequest) -> None:
        """
        Raises:
            ValidationError: If the current password does not match
        """
        if not verify_password(data.current_password, self.user.hashed_password):
            raise ValidationError("Current password is incorrect")

        self._log_operation("Changing password", user_id=self.user.id)

        await self._execute_db_operation(
            "change_password",
            self.repo.apply(self.user, hashed_password=hash_password(data.new_password)),
        )

    async def delete_account(self) -> None:
        """Delete the user's notes, collections and documents, then the user."""
        user_id = self.user.id
        self._log_operation("Deleting account", user_id=user_id)

        # Notes reference collections, so they go first
        await self._execute_db_operation(
            "delete_user_notes",
            self.notes.delete_all_owned(user_id),
        )
        await self._execute_db_operation(
            "delete_user_collections",
            self.collections.delete_all_owned(user_id),
        )
        await self._execute_db_operation(
            "delete_user_documents",
            self.documents.delete_all_owned(user_id),
        )
        # Removing the user also removes its shortlist rows
        await self._execute_db_operation("delete_user", self.repo.remove(self.user))

    # -------------------------------------------------------------------------
    # Shortlist
    # -------------------------------------------------------------------------

    def shortlist(self) -> list[University]:
        """Shortlisted universities in the order they were added."""
        return list(self.user.shortlisted_universities)

    async def add_to_shortlist(self, university_id: str) -> University:
        """
        Raises:
            NotFoundError: If the university does not exist
            ValidationError: If it is already shortlisted
        """
        university = await self.universities.get_by_id(university_id)
        if any(u.id == university.id for u in self.user.shortlisted_universities):
            raise ValidationError("University already in shortlist")

        self._log_operation(
            "Adding to shortlist",
            user_id=self.user.id,
            university_id=university.id,
        )

        self.user.shortlisted_universities.append(university)
        await self._execute_db_operation("add_to_shortlist", self.session.flush())
        return university

    async def remove_from_shortlist(self, university_id: str) -> None:
        """Remove a university if shortlisted; removing an absent one is a no-op."""
        remaining = [u for u in self.user.shortlisted_universities if u.id != university_id]
        if len(remaining) == len(self.user.shortlisted_universities):
            return

        self._log_operation(
            "Removing from shortlist",
            user_id=self.user.id,
            university_id=university_id,
        )

        self.user.shortlisted_universities = remaining
        await self._execute_db_operation("remove_from_shortlist", self.session.flush())

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    async def dashboard(self) -> Dashboard:
        """
        Counts and recent activity across the user's records.

        Queries run one after another on the request's session; any
        failure fails the whole request.
        """
        user_id = self.user.id

        counts = ActivityCounts(
            shortlisted_universities=len(self.user.shortlisted_universities),
            collections=await self.collections.count_owned(user_id),
            notes=await self.notes.count_owned(user_id),
            documents=await self.documents.count_owned(user_id),
            pending_documents=await self.documents.count_by_status(
                user_id, DocumentStatus.PENDING
            ),
            completed_documents=await self.documents.count_by_status(
                user_id, DocumentStatus.COMPLETED
            ),
        )
        recent = OwnedRecords(
            collections=await self.collections.recent(user_id, RECENT_ACTIVITY_LIMIT),
            notes=await self.notes.recent(user_id, RECENT_ACTIVITY_LIMIT),
            documents=await self.documents.recent(user_id, RECENT_ACTIVITY_LIMIT),
        )
        return Dashboard(counts=counts, recent=recent)
