"""
Artwork schemas.

An artwork is the only stored entity that Collections and Exhibitions are
derived from: ``series`` names its collection, ``exhibition_history`` embeds
the exhibitions it was shown in.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, constr, field_validator

from .enums import ArtworkAvailability, PublicationStatus
from .exhibition import ExhibitionEntry
from .primitives import CamelModel


class Artwork(CamelModel):
    """An artwork as returned to clients.

    Invariants:
    - slug, when set, is unique and matches ``^[a-z0-9]+(-[a-z0-9]+)*$``.
    - version increases on every write to the row.
    """

    # Object identity
    id: str = Field(..., description="ULID")

    # Descriptive fields
    title: Optional[str] = None
    year: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    featured: bool = False
    category: Optional[str] = None
    medium: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    depth: Optional[float] = None
    unit: str = "cm"
    slug: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    tags: List[str] = Field(default_factory=list)
    series: Optional[str] = Field(None, description="Collection the artwork belongs to")
    materials: Optional[str] = None
    technique: Optional[str] = None
    location: Optional[str] = None
    availability: ArtworkAvailability = ArtworkAvailability.AVAILABLE
    price: Optional[float] = None
    currency: str = "USD"
    sort_order: int = 0
    thumbnail_path: Optional[str] = None
    artist_notes: Optional[str] = None
    date_created: Optional[str] = None

    exhibition_history: Optional[List[ExhibitionEntry]] = Field(default_factory=list)

    views_count: int = 0
    media: List[str] = Field(default_factory=list)

    version: int = 1

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", "media", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v):
        return [] if v is None else v


class ArtworkCreate(CamelModel):
    """Schema for creating a new Artwork."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[constr(max_length=512)] = None
    year: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    featured: bool = False
    category: Optional[str] = None
    medium: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    depth: Optional[float] = None
    unit: str = "cm"
    slug: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    tags: List[str] = Field(default_factory=list)
    series: Optional[str] = None
    materials: Optional[str] = None
    technique: Optional[str] = None
    location: Optional[str] = None
    availability: ArtworkAvailability = ArtworkAvailability.AVAILABLE
    price: Optional[float] = None
    currency: str = "USD"
    sort_order: int = 0
    thumbnail_path: Optional[str] = None
    artist_notes: Optional[str] = None
    date_created: Optional[str] = None
    exhibition_history: List[ExhibitionEntry] = Field(default_factory=list)
    media: List[str] = Field(default_factory=list)


class ArtworkUpdate(CamelModel):
    """Partial update; only fields present in the payload are written.

    ``version``, if given, must equal the stored version or the update is
    rejected as a concurrent modification.
    """

    model_config = ConfigDict(extra="forbid")

    title: Optional[constr(max_length=512)] = None
    year: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    featured: Optional[bool] = None
    category: Optional[str] = None
    medium: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    depth: Optional[float] = None
    unit: Optional[str] = None
    slug: Optional[str] = None
    status: Optional[PublicationStatus] = None
    tags: Optional[List[str]] = None
    series: Optional[str] = None
    materials: Optional[str] = None
    technique: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[ArtworkAvailability] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    sort_order: Optional[int] = None
    thumbnail_path: Optional[str] = None
    artist_notes: Optional[str] = None
    date_created: Optional[str] = None
    exhibition_history: Optional[List[ExhibitionEntry]] = None
    media: Optional[List[str]] = None

    version: Optional[int] = None
