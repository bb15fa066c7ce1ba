"""
Media library schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from .primitives import CamelModel


class Media(CamelModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    file_url: str
    file_type: str = Field(..., description="Broad type, e.g. 'image' or 'video'")
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    alt_text: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    folder: Optional[str] = None
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v):
        return [] if v is None else v


class MediaCreate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: str = ""
    description: Optional[str] = None
    file_url: str = ""
    file_type: str = ""
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    alt_text: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    folder: Optional[str] = None
    featured: bool = False


class MediaUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    alt_text: Optional[str] = None
    tags: Optional[List[str]] = None
    folder: Optional[str] = None
    featured: Optional[bool] = None
