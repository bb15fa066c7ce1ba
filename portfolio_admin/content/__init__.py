"""
Portfolio content: artworks, performances, pages, blog posts and media, plus
the two groupings derived from artworks.

- Collection: every artwork sharing a ``series`` value
- Exhibition: every artwork whose ``exhibition_history`` holds an entry with
  the same (name, venue, dates)

Neither grouping is stored; both are computed by ``aggregation`` and changed
by rewriting artwork rows in ``groupings``.
"""

from .aggregation import (
    AggregationService,
    Exhibition,
    group_collections,
    group_exhibitions,
    parse_exhibition_date,
)
from .artwork import Artwork, ArtworkCreate, ArtworkUpdate
from .blog import Blog, BlogCreate, BlogUpdate
from .enums import (
    ArtworkAvailability,
    EntityKind,
    PageContentType,
    PerformanceType,
    PublicationStatus,
)
from .exhibition import BulkResult, ExhibitionEntry, ExhibitionKey
from .groupings import CollectionService, ExhibitionService
from .media import Media, MediaCreate, MediaUpdate
from .page import Page, PageCreate, PageUpdate
from .performance import Performance, PerformanceCreate, PerformanceUpdate
from .primitives import generate_ulid, slugify, validate_slug
from .services import (
    ArtworkService,
    BlogService,
    MediaService,
    PageService,
    PerformanceService,
)

__all__ = [
    # Aggregation
    "AggregationService",
    "Exhibition",
    "group_collections",
    "group_exhibitions",
    "parse_exhibition_date",
    # Schemas
    "Artwork",
    "ArtworkCreate",
    "ArtworkUpdate",
    "Blog",
    "BlogCreate",
    "BlogUpdate",
    "BulkResult",
    "ExhibitionEntry",
    "ExhibitionKey",
    "Media",
    "MediaCreate",
    "MediaUpdate",
    "Page",
    "PageCreate",
    "PageUpdate",
    "Performance",
    "PerformanceCreate",
    "PerformanceUpdate",
    # Enums
    "ArtworkAvailability",
    "EntityKind",
    "PageContentType",
    "PerformanceType",
    "PublicationStatus",
    # Services
    "ArtworkService",
    "BlogService",
    "CollectionService",
    "ExhibitionService",
    "MediaService",
    "PageService",
    "PerformanceService",
    # Helpers
    "generate_ulid",
    "slugify",
    "validate_slug",
]
