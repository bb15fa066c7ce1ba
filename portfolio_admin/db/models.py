"""
SQLAlchemy models for Portfolio Admin.

Column names are the storage (snake_case) names. The application and wire
representation lives in ``portfolio_admin.content``; the two are bridged by
``portfolio_admin.content.mapper``.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from .base import Base

publication_status_values = ("published", "draft", "archived")

artwork_availability_enum = Enum(
    "available",
    "sold",
    "on_loan",
    "private_collection",
    "nfs",
    name="artwork_availability",
)

performance_type_enum = Enum(
    "solo", "group", "collaboration", "online", "hybrid", name="performance_type"
)

page_content_type_enum = Enum("html", "markdown", "json", name="page_content_type")


class ArtworkModel(Base):
    """SQLAlchemy model for artworks.

    ``series`` is the only link between an artwork and a collection, and
    ``exhibition_history`` embeds a denormalized copy of every exhibition the
    artwork was shown in. Neither has a table of its own.

    ``version`` is an optimistic-lock counter: the ORM adds
    ``WHERE version = <read value>`` to every UPDATE and raises
    ``StaleDataError`` if the row changed in between.
    """

    __tablename__ = "artworks"

    id = Column(String(128), primary_key=True)

    # Descriptive fields
    title = Column(String(512), nullable=True)
    year = Column(String(32), nullable=True)
    description = Column(Text, nullable=True)
    link = Column(String(2000), nullable=True)
    featured = Column(Boolean, nullable=False, default=False)
    category = Column(String(128), nullable=True, index=True)
    medium = Column(String(256), nullable=True)
    width = Column(Float, nullable=True)
    height = Column(Float, nullable=True)
    depth = Column(Float, nullable=True)
    unit = Column(String(16), nullable=False, default="cm")
    slug = Column(String(256), nullable=True, unique=True, index=True)
    status = Column(
        Enum(*publication_status_values, name="artwork_status"),
        nullable=False,
        default="draft",
        index=True,
    )
    tags = Column(JSON, nullable=False, default=list)
    series = Column(String(256), nullable=True, index=True)
    materials = Column(String(512), nullable=True)
    technique = Column(String(512), nullable=True)
    location = Column(String(512), nullable=True)
    availability = Column(
        artwork_availability_enum, nullable=False, default="available"
    )
    price = Column(Float, nullable=True)
    currency = Column(String(8), nullable=False, default="USD")
    sort_order = Column(Integer, nullable=False, default=0)
    thumbnail_path = Column(String(2000), nullable=True)
    artist_notes = Column(Text, nullable=True)
    date_created = Column(String(64), nullable=True)

    # Embedded exhibition entries (camelCase keys inside the JSON)
    exhibition_history = Column(JSON(none_as_null=True), nullable=True, default=list)

    views_count = Column(Integer, nullable=False, default=0)
    media = Column(JSON, nullable=False, default=list)

    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        onupdate=func.now(),
    )

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("ix_artworks_sort_updated", "sort_order", "updated_at"),
        Index("ix_artworks_status_featured", "status", "featured"),
    )


class PerformanceModel(Base):
    """SQLAlchemy model for performances."""

    __tablename__ = "performances"

    id = Column(String(128), primary_key=True)
    title = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)
    venue = Column(String(512), nullable=True)
    location = Column(String(512), nullable=True)
    date = Column(String(32), nullable=True, index=True)
    time = Column(String(32), nullable=True)
    duration = Column(String(64), nullable=True)
    type = Column(performance_type_enum, nullable=False, default="solo")
    category = Column(String(128), nullable=True)
    director = Column(String(256), nullable=True)
    choreographer = Column(String(256), nullable=True)
    composer = Column(String(256), nullable=True)
    collaborators = Column(Text, nullable=True)
    cover_image = Column(String(2000), nullable=True)
    media = Column(JSON, nullable=False, default=list)
    video_url = Column(String(2000), nullable=True)
    about = Column(Text, nullable=True)
    program_notes = Column(Text, nullable=True)
    reviews = Column(Text, nullable=True)
    tickets_url = Column(String(2000), nullable=True)
    website_url = Column(String(2000), nullable=True)
    slug = Column(String(256), nullable=True, unique=True, index=True)
    status = Column(
        Enum(*publication_status_values, name="performance_status"),
        nullable=False,
        default="draft",
        index=True,
    )
    featured = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=False, default=list)
    awards = Column(Text, nullable=True)
    audience_size = Column(Integer, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    views_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        onupdate=func.now(),
    )


class PageModel(Base):
    """SQLAlchemy model for CMS pages (owner-scoped)."""

    __tablename__ = "pages"

    id = Column(String(128), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    title = Column(String(512), nullable=False)
    slug = Column(String(256), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False, default="")
    content_type = Column(page_content_type_enum, nullable=False, default="html")
    template = Column(String(128), nullable=True)
    meta_title = Column(String(512), nullable=True)
    meta_description = Column(Text, nullable=True)
    meta_keywords = Column(JSON, nullable=False, default=list)
    featured_image_url = Column(String(2000), nullable=True)
    status = Column(
        Enum(*publication_status_values, name="page_status"),
        nullable=False,
        default="draft",
    )
    published_at = Column(DateTime(timezone=True), nullable=True)
    parent_id = Column(String(128), ForeignKey("pages.id"), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_homepage = Column(Boolean, nullable=False, default=False)
    markdown_file_url = Column(String(2000), nullable=True)
    json_file_url = Column(String(2000), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (Index("ix_pages_user_homepage", "user_id", "is_homepage"),)


class BlogModel(Base):
    """SQLAlchemy model for blog posts (owner-scoped)."""

    __tablename__ = "blogs"

    id = Column(String(128), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    title = Column(String(512), nullable=False)
    slug = Column(String(256), nullable=False, unique=True, index=True)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    featured_image_url = Column(String(2000), nullable=True)
    status = Column(
        Enum(*publication_status_values, name="blog_status"),
        nullable=False,
        default="draft",
    )
    published_at = Column(DateTime(timezone=True), nullable=True)
    author_name = Column(String(256), nullable=True)
    category = Column(String(128), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    seo_title = Column(String(512), nullable=True)
    seo_description = Column(Text, nullable=True)
    featured = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        onupdate=func.now(),
    )


class MediaModel(Base):
    """SQLAlchemy model for media library items (owner-scoped)."""

    __tablename__ = "media"

    id = Column(String(128), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    title = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)
    file_url = Column(String(2000), nullable=False)
    file_type = Column(String(64), nullable=False, index=True)
    file_size = Column(Integer, nullable=True)
    mime_type = Column(String(128), nullable=True)
    alt_text = Column(String(1000), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    folder = Column(String(256), nullable=True, index=True)
    featured = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        onupdate=func.now(),
    )
