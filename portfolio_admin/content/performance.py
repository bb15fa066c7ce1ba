"""
Performance schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, constr, field_validator

from .enums import PerformanceType, PublicationStatus
from .primitives import CamelModel


class Performance(CamelModel):
    """A live or recorded performance."""

    id: str
    title: str
    description: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = Field(None, description="ISO date of the performance")
    time: Optional[str] = None
    duration: Optional[str] = None
    type: PerformanceType = PerformanceType.SOLO
    category: Optional[str] = None
    director: Optional[str] = None
    choreographer: Optional[str] = None
    composer: Optional[str] = None
    collaborators: Optional[str] = None
    cover_image: Optional[str] = None
    media: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    about: Optional[str] = None
    program_notes: Optional[str] = None
    reviews: Optional[str] = None
    tickets_url: Optional[str] = None
    website_url: Optional[str] = None
    slug: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    featured: bool = False
    tags: List[str] = Field(default_factory=list)
    awards: Optional[str] = None
    audience_size: Optional[int] = None
    sort_order: int = 0
    views_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", "media", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v):
        return [] if v is None else v


class PerformanceCreate(CamelModel):
    """Schema for creating a new Performance."""

    model_config = ConfigDict(extra="forbid")

    title: constr(max_length=512)
    description: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    type: PerformanceType = PerformanceType.SOLO
    category: Optional[str] = None
    director: Optional[str] = None
    choreographer: Optional[str] = None
    composer: Optional[str] = None
    collaborators: Optional[str] = None
    cover_image: Optional[str] = None
    media: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    about: Optional[str] = None
    program_notes: Optional[str] = None
    reviews: Optional[str] = None
    tickets_url: Optional[str] = None
    website_url: Optional[str] = None
    slug: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    featured: bool = False
    tags: List[str] = Field(default_factory=list)
    awards: Optional[str] = None
    audience_size: Optional[int] = None
    sort_order: int = 0


class PerformanceUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[constr(max_length=512)] = None
    description: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    type: Optional[PerformanceType] = None
    category: Optional[str] = None
    director: Optional[str] = None
    choreographer: Optional[str] = None
    composer: Optional[str] = None
    collaborators: Optional[str] = None
    cover_image: Optional[str] = None
    media: Optional[List[str]] = None
    video_url: Optional[str] = None
    about: Optional[str] = None
    program_notes: Optional[str] = None
    reviews: Optional[str] = None
    tickets_url: Optional[str] = None
    website_url: Optional[str] = None
    slug: Optional[str] = None
    status: Optional[PublicationStatus] = None
    featured: Optional[bool] = None
    tags: Optional[List[str]] = None
    awards: Optional[str] = None
    audience_size: Optional[int] = None
    sort_order: Optional[int] = None
