"""
Blog post schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from .enums import PublicationStatus
from .primitives import CamelModel


class Blog(CamelModel):
    id: str
    user_id: str
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: str
    featured_image_url: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    published_at: Optional[datetime] = None
    author_name: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    featured: bool = False
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v):
        return [] if v is None else v


class BlogCreate(CamelModel):
    """Schema for creating a blog post.

    ``title`` and ``content`` are checked for blank values by the service so
    the caller gets a REQUIRED_FIELD error rather than a schema error.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = ""
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: str = ""
    featured_image_url: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    published_at: Optional[datetime] = None
    author_name: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    featured: bool = False


class BlogUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    featured_image_url: Optional[str] = None
    status: Optional[PublicationStatus] = None
    published_at: Optional[datetime] = None
    author_name: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    featured: Optional[bool] = None
