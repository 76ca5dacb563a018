"""
API Router.

Aggregates all endpoint routers under the configured API prefix.
"""

from fastapi import APIRouter

from beyondnp.backend.api.endpoints import (
    collections,
    documents,
    notes,
    universities,
    users,
)

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(collections.router, prefix="/collections", tags=["collections"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(documents.router, prefix="/documents", tags=["documents"])
router.include_router(universities.router, prefix="/universities", tags=["universities"])
