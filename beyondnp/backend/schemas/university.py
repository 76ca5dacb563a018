"""
University Schemas.

Pydantic schemas for the university catalog.
"""

from datetime import datetime

from pydantic import Field

from beyondnp.backend.schemas.base import CamelModel


class UniversityCreate(CamelModel):
    """Schema for adding a university to the catalog."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Arizona State University"])
    location: str = Field(..., min_length=1, max_length=100, examples=["Tempe, AZ"])
    link: str = Field(
        ...,
        max_length=500,
        pattern=r"^https?://\S+$",
        description="Admissions or homepage URL (http or https)",
        examples=["https://www.asu.edu"],
    )
    state: str | None = Field(default=None, max_length=50)
    country: str = Field(default="USA", max_length=100)
    ranking: int | None = Field(default=None, ge=1)
    acceptance_rate: float | None = Field(default=None, ge=0, le=100)
    tuition_fee: float | None = Field(default=None, ge=0)
    is_public: bool = False
    programs: list[str] = Field(default_factory=list)
    description: str | None = Field(default=None, max_length=500)


class UniversityResponse(CamelModel):
    """Schema for a university in API responses."""

    id: str
    name: str
    location: str
    link: str
    state: str | None
    country: str
    ranking: int | None
    acceptance_rate: float | None
    tuition_fee: float | None
    is_public: bool
    programs: list[str]
    description: str | None
    created_at: datetime
    updated_at: datetime
