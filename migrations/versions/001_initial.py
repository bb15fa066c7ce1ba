"""Create initial tables

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18

"""
import sqlalchemy as sa
from alembic import op

# revision identifiers
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None

PUBLICATION_STATUS = ("published", "draft", "archived")


def _timestamps():
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    # Create artworks table
    op.create_table(
        "artworks",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("title", sa.String(512), nullable=True),
        sa.Column("year", sa.String(32), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("link", sa.String(2000), nullable=True),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("category", sa.String(128), nullable=True),
        sa.Column("medium", sa.String(256), nullable=True),
        sa.Column("width", sa.Float, nullable=True),
        sa.Column("height", sa.Float, nullable=True),
        sa.Column("depth", sa.Float, nullable=True),
        sa.Column("unit", sa.String(16), nullable=False, server_default="cm"),
        sa.Column("slug", sa.String(256), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*PUBLICATION_STATUS, name="artwork_status"),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("series", sa.String(256), nullable=True),
        sa.Column("materials", sa.String(512), nullable=True),
        sa.Column("technique", sa.String(512), nullable=True),
        sa.Column("location", sa.String(512), nullable=True),
        sa.Column(
            "availability",
            sa.Enum(
                "available",
                "sold",
                "on_loan",
                "private_collection",
                "nfs",
                name="artwork_availability",
            ),
            nullable=False,
            server_default="available",
        ),
        sa.Column("price", sa.Float, nullable=True),
        sa.Column("currency", sa.String(8), nullable=False, server_default="USD"),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("thumbnail_path", sa.String(2000), nullable=True),
        sa.Column("artist_notes", sa.Text, nullable=True),
        sa.Column("date_created", sa.String(64), nullable=True),
        sa.Column("exhibition_history", sa.JSON, nullable=True),
        sa.Column("views_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("media", sa.JSON, nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        *_timestamps(),
    )
    op.create_index("ix_artworks_slug", "artworks", ["slug"], unique=True)
    op.create_index("ix_artworks_series", "artworks", ["series"])
    op.create_index("ix_artworks_category", "artworks", ["category"])
    op.create_index("ix_artworks_status", "artworks", ["status"])
    op.create_index("ix_artworks_sort_updated", "artworks", ["sort_order", "updated_at"])
    op.create_index("ix_artworks_status_featured", "artworks", ["status", "featured"])

    # Create performances table
    op.create_table(
        "performances",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("venue", sa.String(512), nullable=True),
        sa.Column("location", sa.String(512), nullable=True),
        sa.Column("date", sa.String(32), nullable=True),
        sa.Column("time", sa.String(32), nullable=True),
        sa.Column("duration", sa.String(64), nullable=True),
        sa.Column(
            "type",
            sa.Enum(
                "solo", "group", "collaboration", "online", "hybrid",
                name="performance_type",
            ),
            nullable=False,
            server_default="solo",
        ),
        sa.Column("category", sa.String(128), nullable=True),
        sa.Column("director", sa.String(256), nullable=True),
        sa.Column("choreographer", sa.String(256), nullable=True),
        sa.Column("composer", sa.String(256), nullable=True),
        sa.Column("collaborators", sa.Text, nullable=True),
        sa.Column("cover_image", sa.String(2000), nullable=True),
        sa.Column("media", sa.JSON, nullable=False),
        sa.Column("video_url", sa.String(2000), nullable=True),
        sa.Column("about", sa.Text, nullable=True),
        sa.Column("program_notes", sa.Text, nullable=True),
        sa.Column("reviews", sa.Text, nullable=True),
        sa.Column("tickets_url", sa.String(2000), nullable=True),
        sa.Column("website_url", sa.String(2000), nullable=True),
        sa.Column("slug", sa.String(256), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*PUBLICATION_STATUS, name="performance_status"),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("awards", sa.Text, nullable=True),
        sa.Column("audience_size", sa.Integer, nullable=True),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("views_count", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_performances_slug", "performances", ["slug"], unique=True)
    op.create_index("ix_performances_date", "performances", ["date"])
    op.create_index("ix_performances_status", "performances", ["status"])

    # Create pages table
    op.create_table(
        "pages",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("slug", sa.String(256), nullable=False),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
        sa.Column(
            "content_type",
            sa.Enum("html", "markdown", "json", name="page_content_type"),
            nullable=False,
            server_default="html",
        ),
        sa.Column("template", sa.String(128), nullable=True),
        sa.Column("meta_title", sa.String(512), nullable=True),
        sa.Column("meta_description", sa.Text, nullable=True),
        sa.Column("meta_keywords", sa.JSON, nullable=False),
        sa.Column("featured_image_url", sa.String(2000), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*PUBLICATION_STATUS, name="page_status"),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("parent_id", sa.String(128), sa.ForeignKey("pages.id"), nullable=True),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_homepage", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("markdown_file_url", sa.String(2000), nullable=True),
        sa.Column("json_file_url", sa.String(2000), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_pages_slug", "pages", ["slug"], unique=True)
    op.create_index("ix_pages_user_id", "pages", ["user_id"])
    op.create_index("ix_pages_user_homepage", "pages", ["user_id", "is_homepage"])

    # Create blogs table
    op.create_table(
        "blogs",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("slug", sa.String(256), nullable=False),
        sa.Column("excerpt", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("featured_image_url", sa.String(2000), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*PUBLICATION_STATUS, name="blog_status"),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("author_name", sa.String(256), nullable=True),
        sa.Column("category", sa.String(128), nullable=True),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("seo_title", sa.String(512), nullable=True),
        sa.Column("seo_description", sa.Text, nullable=True),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("views", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_blogs_slug", "blogs", ["slug"], unique=True)
    op.create_index("ix_blogs_user_id", "blogs", ["user_id"])

    # Create media table
    op.create_table(
        "media",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("file_url", sa.String(2000), nullable=False),
        sa.Column("file_type", sa.String(64), nullable=False),
        sa.Column("file_size", sa.Integer, nullable=True),
        sa.Column("mime_type", sa.String(128), nullable=True),
        sa.Column("alt_text", sa.String(1000), nullable=True),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("folder", sa.String(256), nullable=True),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_media_user_id", "media", ["user_id"])
    op.create_index("ix_media_file_type", "media", ["file_type"])
    op.create_index("ix_media_folder", "media", ["folder"])

    # Create audit_log table
    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "ts",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "actor_kind",
            sa.Enum("human", "system", name="audit_actor_kind"),
            nullable=False,
        ),
        sa.Column("actor_id", sa.String(128), nullable=False),
        sa.Column(
            "action",
            sa.Enum(
                "created",
                "updated",
                "deleted",
                "renamed",
                "assigned",
                "unassigned",
                name="audit_action",
            ),
            nullable=False,
        ),
        sa.Column("entity_kind", sa.String(50), nullable=False),
        sa.Column("entity_id", sa.String(1024), nullable=False),
        sa.Column("before", sa.JSON, nullable=True),
        sa.Column("after", sa.JSON, nullable=True),
        sa.Column("note", sa.Text, nullable=True),
    )
    op.create_index("ix_audit_log_ts", "audit_log", ["ts"])
    op.create_index("ix_audit_log_actor_id", "audit_log", ["actor_id"])
    op.create_index("ix_audit_log_action", "audit_log", ["action"])
    op.create_index("ix_audit_log_entity_kind", "audit_log", ["entity_kind"])
    op.create_index("ix_audit_log_entity", "audit_log", ["entity_kind", "entity_id"])
    op.create_index("ix_audit_log_ts_action", "audit_log", ["ts", "action"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("media")
    op.drop_table("blogs")
    op.drop_table("pages")
    op.drop_table("performances")
    op.drop_table("artworks")

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for enum_name in (
            "audit_action",
            "audit_actor_kind",
            "blog_status",
            "page_status",
            "page_content_type",
            "performance_status",
            "performance_type",
            "artwork_availability",
            "artwork_status",
        ):
            sa.Enum(name=enum_name).drop(bind, checkfirst=True)
