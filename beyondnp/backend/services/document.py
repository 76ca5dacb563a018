"""
Document Service.

Business logic for the application documents a user tracks.
`completed_date` is maintained by the model's save hooks.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.document import Document
from beyondnp.backend.repositories.document import DocumentRepository
from beyondnp.backend.schemas.document import DocumentCreate, DocumentUpdate
from beyondnp.backend.services.base import OwnedService


class DocumentService(OwnedService):
    """Service for the current user's documents."""

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)
        self.repo = DocumentRepository(session)

    async def list_documents(
        self,
        status: str | None = None,
        category: str | None = None,
    ) -> list[Document]:
        """Active documents, soonest due first, undated last."""
        return await self.repo.list_for_user(self.user_id, status=status, category=category)

    async def list_archived(self) -> list[Document]:
        return await self.repo.list_for_user(self.user_id, archived=True)

    async def get_document(self, document_id: str) -> Document:
        """
        Raises:
            NotFoundError: If missing or owned by another user
        """
        return await self.repo.get_owned(document_id, self.user_id)

    async def create_document(self, data: DocumentCreate) -> Document:
        """
        Create a document.

        Raises:
            ValidationError: If the title is missing
        """
        self._validate_required(
            {"title": data.title},
            ["title"],
            message="Document title is required",
        )

        self._log_operation("Creating document", title=data.title, status=data.status)

        document = await self._execute_db_operation(
            "create_document",
            self.repo.create(user_id=self.user_id, **data.model_dump()),
        )

        self._log_debug("Document created", document_id=document.id)
        return document

    async def update_document(self, document_id: str, data: DocumentUpdate) -> Document:
        """
        Apply the fields present in the payload.

        Moving the status into or out of `completed` stamps or clears
        `completed_date` on flush.
        """
        document = await self.get_document(document_id)
        changes = data.changes()

        self._log_operation(
            "Updating document",
            document_id=document.id,
            fields=list(changes.keys()),
        )

        return await self._execute_db_operation(
            "update_document",
            self.repo.apply(document, **changes, last_modified=utc_now()),
        )

    async def delete_document(self, document_id: str) -> None:
        document = await self.get_document(document_id)

        self._log_operation("Deleting document", document_id=document.id)

        await self._execute_db_operation("delete_document", self.repo.remove(document))
