"""
CMS page schemas.

Pages belong to the user who created them. Besides the database row, every
saved page is rendered to ``<slug>.md`` (front matter + body) and
``<slug>.json`` in the ``pages`` storage bucket.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, constr, field_validator

from .enums import PageContentType, PublicationStatus
from .primitives import CamelModel


class Page(CamelModel):
    id: str
    user_id: str
    title: str
    slug: str
    content: str = ""
    content_type: PageContentType = PageContentType.HTML
    template: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: List[str] = Field(default_factory=list)
    featured_image_url: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    published_at: Optional[datetime] = None
    parent_id: Optional[str] = None
    sort_order: int = 0
    is_homepage: bool = False
    markdown_file_url: Optional[str] = None
    json_file_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("meta_keywords", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v):
        return [] if v is None else v


class PageCreate(CamelModel):
    """Schema for creating a Page. ``slug`` defaults to the slugified title."""

    model_config = ConfigDict(extra="forbid")

    title: constr(max_length=512)
    slug: Optional[str] = None
    content: str = ""
    content_type: PageContentType = PageContentType.HTML
    template: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: List[str] = Field(default_factory=list)
    featured_image_url: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    published_at: Optional[datetime] = None
    parent_id: Optional[str] = None
    sort_order: int = 0
    is_homepage: bool = False


class PageUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[constr(max_length=512)] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    content_type: Optional[PageContentType] = None
    template: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[List[str]] = None
    featured_image_url: Optional[str] = None
    status: Optional[PublicationStatus] = None
    published_at: Optional[datetime] = None
    parent_id: Optional[str] = None
    sort_order: Optional[int] = None
    is_homepage: Optional[bool] = None
