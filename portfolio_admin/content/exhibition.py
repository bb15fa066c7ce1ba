"""
Exhibition entries and bulk-operation results.

Exhibitions are not stored on their own. Each artwork embeds an
``ExhibitionEntry`` per show it appeared in, and entries that agree on
``(name, venue, dates)`` describe the same exhibition.
"""

from __future__ import annotations

from datetime import date
from typing import List, NamedTuple, Optional

from pydantic import ConfigDict, Field, field_validator

from ..errors import ErrorType
from .primitives import CamelModel


class ExhibitionKey(NamedTuple):
    """Identity of an exhibition across artworks."""

    name: str
    venue: str
    dates: str

    def label(self) -> str:
        """Display form, for logs and audit entries only."""
        return f"{self.name}|{self.venue}|{self.dates}"


class ExhibitionEntry(CamelModel):
    """One exhibition as embedded in ``Artwork.exhibition_history``.

    Key fields are trimmed on validation, so entries read from storage, sent
    by the admin UI and embedded through artwork writes compare alike. Keys
    this schema does not declare are kept on write-back.
    """

    model_config = ConfigDict(extra="allow")

    name: str = ""
    venue: str = ""
    about: str = ""
    curator: str = ""
    dates: str = Field(default="", description="Free-text date range, e.g. 'Jan 2024'")
    cover_image: str = ""
    exhibition_images: List[str] = Field(default_factory=list)
    type: str = ""
    other_artists: str = ""
    start_date: Optional[date] = Field(
        default=None, description="Structured start date used for ordering"
    )

    @field_validator(
        "name", "venue", "about", "curator", "dates", "cover_image", "type",
        "other_artists",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("name", "venue", "dates")
    @classmethod
    def _strip_key_field(cls, v: str) -> str:
        return v.strip()

    @field_validator("exhibition_images", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v):
        return [] if v is None else v

    @field_validator("start_date", mode="before")
    @classmethod
    def _blank_date_as_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def key(self) -> ExhibitionKey:
        return ExhibitionKey(self.name, self.venue, self.dates)


class RowFailure(CamelModel):
    id: str
    error_type: str
    message: str


class BulkResult(CamelModel):
    """Per-row outcome of an operation applied to several artworks.

    ``unchanged`` holds rows the operation did not need to write, such as an
    artwork that already carries the exhibition being added.
    """

    succeeded: List[str] = Field(default_factory=list)
    unchanged: List[str] = Field(default_factory=list)
    failed: List[RowFailure] = Field(default_factory=list)

    def fail(self, row_id: str, error_type: ErrorType, message: str) -> None:
        self.failed.append(
            RowFailure(id=row_id, error_type=error_type.value, message=message)
        )

    @property
    def touched(self) -> int:
        """Rows that ended in the requested state."""
        return len(self.succeeded) + len(self.unchanged)
