"""
Canonical enums for portfolio content.

Values are the stored and wire values; they match the database enum types in
``portfolio_admin.db.models``.
"""

from enum import Enum


class PublicationStatus(str, Enum):
    """Publication state shared by artworks, performances, pages and blogs."""

    PUBLISHED = "published"
    DRAFT = "draft"
    ARCHIVED = "archived"


class ArtworkAvailability(str, Enum):
    AVAILABLE = "available"
    SOLD = "sold"
    ON_LOAN = "on_loan"
    PRIVATE_COLLECTION = "private_collection"
    NFS = "nfs"


class PerformanceType(str, Enum):
    SOLO = "solo"
    GROUP = "group"
    COLLABORATION = "collaboration"
    ONLINE = "online"
    HYBRID = "hybrid"


class PageContentType(str, Enum):
    """How a page's ``content`` is authored."""

    HTML = "html"
    MARKDOWN = "markdown"
    JSON = "json"


class EntityKind(str, Enum):
    """Entity kinds as recorded in the audit log."""

    ARTWORK = "Artwork"
    PERFORMANCE = "Performance"
    PAGE = "Page"
    BLOG = "Blog"
    MEDIA = "Media"
    COLLECTION = "Collection"
    EXHIBITION = "Exhibition"
