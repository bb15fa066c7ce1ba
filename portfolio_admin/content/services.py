"""
CRUD services for portfolio content.

Each service wraps one SQLAlchemy session. Public methods raise ``AppError``
only; database failures are classified by ``wrap_errors``. Every successful
mutation is recorded in the audit log.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Type

import structlog
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.audit_service import AuditService
from ..db.base import Base
from ..db.models import ArtworkModel, BlogModel, MediaModel, PageModel, PerformanceModel
from ..errors import (
    AppError,
    ErrorMessages,
    ErrorType,
    log_error,
    parse_storage_error,
    validate_required,
    wrap_errors,
)
from ..storage import ObjectStore
from .artwork import Artwork, ArtworkCreate, ArtworkUpdate
from .blog import Blog, BlogCreate, BlogUpdate
from .enums import EntityKind, PageContentType, PublicationStatus
from .mapper import (
    artwork_mapper,
    blog_mapper,
    media_mapper,
    page_mapper,
    performance_mapper,
)
from .media import Media, MediaCreate, MediaUpdate
from .page import Page, PageCreate, PageUpdate
from .performance import Performance, PerformanceCreate, PerformanceUpdate
from .primitives import generate_ulid, slugify, utc_now, validate_slug

logger = structlog.get_logger()

PAGES_BUCKET = "pages"
PERFORMANCES_BUCKET = "performances"
MEDIA_BUCKET = "media"

PUBLISHED = PublicationStatus.PUBLISHED.value


class _ContentService:
    """Shared row lookup and slug checks."""

    def __init__(self, db: Session):
        self.db = db
        self.audit = AuditService(db)

    def _get_row(self, model: Type[Base], row_id: str, not_found: str, **scope: Any):
        row = self.db.query(model).filter(model.id == row_id).filter_by(**scope).first()
        if row is None:
            raise AppError(ErrorType.NOT_FOUND, not_found, f"{model.__name__} {row_id} not found")
        return row

    def _ensure_unique_slug(
        self,
        model: Type[Base],
        slug: Optional[str],
        duplicate_message: str,
        exclude_id: Optional[str] = None,
    ) -> None:
        if not slug:
            return
        query = self.db.query(model.id).filter(model.slug == slug)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        if query.first() is not None:
            raise AppError(
                ErrorType.DUPLICATE_ENTRY,
                duplicate_message,
                f"Slug already in use: {slug}",
                {"field": "slug", "value": slug},
            )

    @staticmethod
    def _apply(row: Base, values: Dict[str, Any]) -> None:
        for name, value in values.items():
            setattr(row, name, value)
        row.updated_at = utc_now()


def _normalize_series(values: Dict[str, Any]) -> None:
    """A blank series means "no collection"."""
    if "series" in values:
        series = values["series"]
        values["series"] = series.strip() if series and series.strip() else None


class ArtworkService(_ContentService):
    """Service for Artwork CRUD operations."""

    @wrap_errors("fetch", "Artworks", ErrorMessages.FETCH_FAILED)
    def list_artworks(
        self,
        status: Optional[str] = None,
        category: Optional[str] = None,
        featured: Optional[bool] = None,
        availability: Optional[str] = None,
        series: Optional[str] = None,
        limit: Optional[int] = None,
        include_drafts: bool = False,
    ) -> List[Artwork]:
        """List artworks, published only unless drafts or a status are asked for."""
        query = self.db.query(ArtworkModel)

        if status:
            query = query.filter(ArtworkModel.status == status)
        elif not include_drafts:
            query = query.filter(ArtworkModel.status == PUBLISHED)
        if category:
            query = query.filter(ArtworkModel.category == category)
        if featured is not None:
            query = query.filter(ArtworkModel.featured == featured)
        if availability:
            query = query.filter(ArtworkModel.availability == availability)
        if series:
            query = query.filter(ArtworkModel.series == series)

        query = query.order_by(
            ArtworkModel.sort_order.asc(), ArtworkModel.updated_at.desc()
        )
        if limit:
            query = query.limit(limit)
        return artwork_mapper.to_app_list(query.all())

    @wrap_errors("fetch", "Artwork")
    def get_artwork(self, artwork_id: str) -> Artwork:
        row = self._get_row(ArtworkModel, artwork_id, ErrorMessages.ARTWORK_NOT_FOUND)
        return artwork_mapper.to_app(row)

    @wrap_errors("fetch", "Artwork")
    def get_artwork_by_slug(self, slug: str) -> Artwork:
        """Public lookup: only published artworks are visible."""
        row = (
            self.db.query(ArtworkModel)
            .filter(ArtworkModel.slug == slug, ArtworkModel.status == PUBLISHED)
            .first()
        )
        if row is None:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.ARTWORK_NOT_FOUND,
                f"No published artwork with slug {slug!r}",
            )
        return artwork_mapper.to_app(row)

    @wrap_errors("create", "Artwork", ErrorMessages.ARTWORK_CREATE_FAILED)
    def create_artwork(self, data: ArtworkCreate, actor_id: str = "unknown") -> Artwork:
        values = artwork_mapper.to_db(data)
        _normalize_series(values)
        validate_slug(values.get("slug"))
        self._ensure_unique_slug(
            ArtworkModel, values.get("slug"), ErrorMessages.ARTWORK_DUPLICATE_SLUG
        )

        now = utc_now()
        row = ArtworkModel(id=generate_ulid(), created_at=now, updated_at=now, **values)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)

        logger.info("artwork_created", artwork_id=row.id, slug=row.slug)
        self.audit.log_create(
            EntityKind.ARTWORK.value, row.id, artwork_mapper.snapshot(row), actor_id=actor_id
        )
        return artwork_mapper.to_app(row)

    @wrap_errors("update", "Artwork", ErrorMessages.ARTWORK_UPDATE_FAILED)
    def update_artwork(
        self, artwork_id: str, data: ArtworkUpdate, actor_id: str = "unknown"
    ) -> Artwork:
        row = self._get_row(ArtworkModel, artwork_id, ErrorMessages.ARTWORK_NOT_FOUND)
        if data.version is not None and data.version != row.version:
            raise AppError(
                ErrorType.UPDATE_FAILED,
                ErrorMessages.CONCURRENT_MODIFICATION,
                f"Artwork {artwork_id} is at version {row.version}, "
                f"update was based on {data.version}",
            )

        values = artwork_mapper.to_db(data, partial=True)
        _normalize_series(values)
        if "slug" in values:
            validate_slug(values["slug"])
            self._ensure_unique_slug(
                ArtworkModel,
                values["slug"],
                ErrorMessages.ARTWORK_DUPLICATE_SLUG,
                exclude_id=artwork_id,
            )

        before = artwork_mapper.snapshot(row)
        self._apply(row, values)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_update(
            EntityKind.ARTWORK.value,
            row.id,
            before,
            artwork_mapper.snapshot(row),
            actor_id=actor_id,
        )
        return artwork_mapper.to_app(row)

    @wrap_errors("delete", "Artwork", ErrorMessages.ARTWORK_DELETE_FAILED)
    def delete_artwork(self, artwork_id: str, actor_id: str = "unknown") -> None:
        row = self._get_row(ArtworkModel, artwork_id, ErrorMessages.ARTWORK_NOT_FOUND)
        before = artwork_mapper.snapshot(row)
        self.db.delete(row)
        self.db.commit()

        logger.info("artwork_deleted", artwork_id=artwork_id)
        self.audit.log_delete(EntityKind.ARTWORK.value, artwork_id, before, actor_id=actor_id)

    def _free_copy_slug(self, slug: str) -> str:
        candidate = f"{slug}-copy"
        suffix = 2
        while (
            self.db.query(ArtworkModel.id).filter(ArtworkModel.slug == candidate).first()
            is not None
        ):
            candidate = f"{slug}-copy-{suffix}"
            suffix += 1
        return candidate

    @wrap_errors("create", "Artwork", ErrorMessages.ARTWORK_CREATE_FAILED)
    def duplicate_artwork(self, artwork_id: str, actor_id: str = "unknown") -> Artwork:
        """Copy an artwork as an unfeatured draft."""
        original = self.get_artwork(artwork_id)
        copied = original.model_dump(
            include=set(ArtworkCreate.model_fields), exclude_none=True
        )
        copied.update(
            title=f"{original.title} (Copy)" if original.title else None,
            slug=self._free_copy_slug(original.slug) if original.slug else None,
            status=PublicationStatus.DRAFT,
            featured=False,
        )
        return self.create_artwork(ArtworkCreate(**copied), actor_id=actor_id)

    def increment_artwork_views(self, artwork_id: str) -> None:
        """Count a view. Failures are logged and otherwise ignored."""
        try:
            self.db.query(ArtworkModel).filter(ArtworkModel.id == artwork_id).update(
                {ArtworkModel.views_count: ArtworkModel.views_count + 1},
                synchronize_session=False,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("artwork_view_not_counted", artwork_id=artwork_id, error=str(e))


class PerformanceService(_ContentService):
    """Service for Performance CRUD operations."""

    def __init__(self, db: Session, store: Optional[ObjectStore] = None):
        super().__init__(db)
        self.store = store

    @wrap_errors("fetch", "Performances", ErrorMessages.FETCH_FAILED)
    def list_performances(
        self,
        status: Optional[str] = None,
        featured: Optional[bool] = None,
        category: Optional[str] = None,
        performance_type: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Performance]:
        query = self.db.query(PerformanceModel)

        if status:
            query = query.filter(PerformanceModel.status == status)
        if featured is not None:
            query = query.filter(PerformanceModel.featured == featured)
        if category:
            query = query.filter(PerformanceModel.category == category)
        if performance_type:
            query = query.filter(PerformanceModel.type == performance_type)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    PerformanceModel.title.ilike(pattern),
                    PerformanceModel.description.ilike(pattern),
                    PerformanceModel.venue.ilike(pattern),
                    PerformanceModel.location.ilike(pattern),
                )
            )

        query = query.order_by(
            PerformanceModel.sort_order.asc(), PerformanceModel.date.desc()
        )
        if limit:
            query = query.limit(limit)
        return performance_mapper.to_app_list(query.all())

    def get_published_performances(self) -> List[Performance]:
        return self.list_performances(status=PUBLISHED)

    def get_featured_performances(self, limit: Optional[int] = None) -> List[Performance]:
        return self.list_performances(status=PUBLISHED, featured=True, limit=limit)

    @wrap_errors("fetch", "Performance")
    def get_performance(self, performance_id: str) -> Performance:
        row = self._get_row(
            PerformanceModel, performance_id, ErrorMessages.PERFORMANCE_NOT_FOUND
        )
        return performance_mapper.to_app(row)

    @wrap_errors("fetch", "Performance")
    def get_performance_by_slug(self, slug: str) -> Performance:
        row = (
            self.db.query(PerformanceModel)
            .filter(PerformanceModel.slug == slug, PerformanceModel.status == PUBLISHED)
            .first()
        )
        if row is None:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.PERFORMANCE_NOT_FOUND,
                f"No published performance with slug {slug!r}",
            )
        return performance_mapper.to_app(row)

    @wrap_errors("create", "Performance", ErrorMessages.PERFORMANCE_CREATE_FAILED)
    def create_performance(
        self, data: PerformanceCreate, actor_id: str = "unknown"
    ) -> Performance:
        validate_required(data.model_dump(), ["title"])
        values = performance_mapper.to_db(data)
        validate_slug(values.get("slug"))
        self._ensure_unique_slug(
            PerformanceModel, values.get("slug"), ErrorMessages.PERFORMANCE_DUPLICATE_SLUG
        )

        now = utc_now()
        row = PerformanceModel(id=generate_ulid(), created_at=now, updated_at=now, **values)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_create(
            EntityKind.PERFORMANCE.value,
            row.id,
            performance_mapper.snapshot(row),
            actor_id=actor_id,
        )
        return performance_mapper.to_app(row)

    @wrap_errors("update", "Performance", ErrorMessages.PERFORMANCE_UPDATE_FAILED)
    def update_performance(
        self, performance_id: str, data: PerformanceUpdate, actor_id: str = "unknown"
    ) -> Performance:
        row = self._get_row(
            PerformanceModel, performance_id, ErrorMessages.PERFORMANCE_NOT_FOUND
        )
        values = performance_mapper.to_db(data, partial=True)
        if "title" in values:
            validate_required(values, ["title"])
        if "slug" in values:
            validate_slug(values["slug"])
            self._ensure_unique_slug(
                PerformanceModel,
                values["slug"],
                ErrorMessages.PERFORMANCE_DUPLICATE_SLUG,
                exclude_id=performance_id,
            )

        before = performance_mapper.snapshot(row)
        self._apply(row, values)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_update(
            EntityKind.PERFORMANCE.value,
            row.id,
            before,
            performance_mapper.snapshot(row),
            actor_id=actor_id,
        )
        return performance_mapper.to_app(row)

    def _remove_files(self, references: Iterable[str]) -> None:
        """Delete stored files; storage failures never block the caller."""
        if self.store is None:
            return
        paths = []
        for ref in references:
            path = self.store.path_from_public_url(PERFORMANCES_BUCKET, ref)
            if path is None and "://" not in ref:
                path = ref
            if path:
                paths.append(path)
        if not paths:
            return
        try:
            self.store.remove(PERFORMANCES_BUCKET, paths)
        except (OSError, ValueError) as e:
            log_error(parse_storage_error(e), bucket=PERFORMANCES_BUCKET, paths=paths)

    @wrap_errors("delete", "Performance", ErrorMessages.PERFORMANCE_DELETE_FAILED)
    def delete_performance(self, performance_id: str, actor_id: str = "unknown") -> None:
        """Delete a performance together with its cover image and media files."""
        row = self._get_row(
            PerformanceModel, performance_id, ErrorMessages.PERFORMANCE_NOT_FOUND
        )
        before = performance_mapper.snapshot(row)
        files = ([row.cover_image] if row.cover_image else []) + list(row.media or [])

        self._remove_files(files)
        self.db.delete(row)
        self.db.commit()

        self.audit.log_delete(
            EntityKind.PERFORMANCE.value, performance_id, before, actor_id=actor_id
        )

    def increment_performance_views(self, performance_id: str) -> None:
        try:
            self.db.query(PerformanceModel).filter(
                PerformanceModel.id == performance_id
            ).update(
                {PerformanceModel.views_count: PerformanceModel.views_count + 1},
                synchronize_session=False,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(
                "performance_view_not_counted", performance_id=performance_id, error=str(e)
            )


def render_page_markdown(page: Dict[str, Any]) -> str:
    """Markdown file for a page: YAML-style front matter, then the body."""
    front_matter = [
        ("title", page["title"]),
        ("slug", page["slug"]),
        ("contentType", page["contentType"]),
        ("template", page.get("template") or "default"),
        ("metaTitle", page.get("metaTitle") or page["title"]),
        ("metaDescription", page.get("metaDescription") or ""),
        ("status", page["status"]),
        ("publishedAt", page.get("publishedAt") or ""),
        ("isHomepage", "true" if page.get("isHomepage") else "false"),
    ]
    content = page.get("content") or ""
    if page["contentType"] == PageContentType.MARKDOWN.value:
        body = content
    else:
        body = f"# {page['title']}\n\n{content}"
    header = "\n".join(f"{key}: {value}" for key, value in front_matter)
    return f"---\n{header}\n---\n\n{body}\n"


def render_page_json(page: Dict[str, Any]) -> str:
    data = {
        "id": page.get("id") or "",
        "title": page["title"],
        "slug": page["slug"],
        "content": page.get("content") or "",
        "contentType": page["contentType"],
        "template": page.get("template") or "default",
        "metaTitle": page.get("metaTitle") or page["title"],
        "metaDescription": page.get("metaDescription") or "",
        "metaKeywords": page.get("metaKeywords") or [],
        "featuredImageUrl": page.get("featuredImageUrl"),
        "status": page["status"],
        "publishedAt": page.get("publishedAt"),
        "parentId": page.get("parentId"),
        "sortOrder": page.get("sortOrder") or 0,
        "isHomepage": bool(page.get("isHomepage")),
    }
    return json.dumps(data, indent=2)


class PageService(_ContentService):
    """Service for CMS pages, scoped to their owner."""

    def __init__(self, db: Session, store: Optional[ObjectStore] = None):
        super().__init__(db)
        self.store = store

    def _upload(self, path: str, content: str, content_type: str) -> Optional[str]:
        """Upload one rendered file; returns its public URL or None on failure."""
        if self.store is None:
            return None
        try:
            self.store.upload(
                PAGES_BUCKET, path, content.encode("utf-8"), content_type, upsert=True
            )
        except (OSError, ValueError) as e:
            log_error(parse_storage_error(e, path), bucket=PAGES_BUCKET)
            return None
        return self.store.get_public_url(PAGES_BUCKET, path)

    def _write_files(self, row: PageModel) -> None:
        page = page_mapper.to_wire(row)
        row.markdown_file_url = self._upload(
            f"{row.slug}.md", render_page_markdown(page), "text/markdown"
        )
        row.json_file_url = self._upload(
            f"{row.slug}.json", render_page_json(page), "application/json"
        )

    def _remove_files(self, slug: str) -> None:
        if self.store is None:
            return
        try:
            self.store.remove(PAGES_BUCKET, [f"{slug}.md", f"{slug}.json"])
        except (OSError, ValueError) as e:
            log_error(parse_storage_error(e), bucket=PAGES_BUCKET, slug=slug)

    def _unset_homepage(self, owner_id: str, keep_id: Optional[str] = None) -> None:
        query = self.db.query(PageModel).filter(
            PageModel.user_id == owner_id, PageModel.is_homepage.is_(True)
        )
        if keep_id is not None:
            query = query.filter(PageModel.id != keep_id)
        query.update({PageModel.is_homepage: False}, synchronize_session=False)

    @wrap_errors("fetch", "Pages", ErrorMessages.FETCH_FAILED)
    def list_pages(self, owner_id: str, status: Optional[str] = None) -> List[Page]:
        query = self.db.query(PageModel).filter(PageModel.user_id == owner_id)
        if status:
            query = query.filter(PageModel.status == status)
        query = query.order_by(PageModel.sort_order.asc(), PageModel.created_at.desc())
        return page_mapper.to_app_list(query.all())

    @wrap_errors("fetch", "Page")
    def get_page(self, page_id: str, owner_id: str) -> Page:
        row = self._get_row(
            PageModel, page_id, ErrorMessages.PAGE_NOT_FOUND, user_id=owner_id
        )
        return page_mapper.to_app(row)

    @wrap_errors("fetch", "Page")
    def get_page_by_slug(self, slug: str) -> Page:
        """Public lookup: only published pages are visible."""
        row = (
            self.db.query(PageModel)
            .filter(PageModel.slug == slug, PageModel.status == PUBLISHED)
            .first()
        )
        if row is None:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.PAGE_NOT_FOUND,
                f"No published page with slug {slug!r}",
            )
        return page_mapper.to_app(row)

    @wrap_errors("fetch", "Page")
    def get_homepage(self, owner_id: str) -> Optional[Page]:
        row = (
            self.db.query(PageModel)
            .filter(
                PageModel.user_id == owner_id,
                PageModel.is_homepage.is_(True),
                PageModel.status == PUBLISHED,
            )
            .first()
        )
        return page_mapper.to_app(row) if row is not None else None

    @wrap_errors("create", "Page", ErrorMessages.PAGE_CREATE_FAILED)
    def create_page(self, data: PageCreate, owner_id: str) -> Page:
        validate_required(data.model_dump(), ["title"])
        values = page_mapper.to_db(data)
        values["slug"] = values.get("slug") or slugify(data.title)
        validate_required(values, ["slug"])
        validate_slug(values["slug"])
        self._ensure_unique_slug(PageModel, values["slug"], ErrorMessages.PAGE_DUPLICATE_SLUG)

        if values.get("status") == PUBLISHED and not values.get("published_at"):
            values["published_at"] = utc_now()
        if values.get("is_homepage"):
            self._unset_homepage(owner_id)

        now = utc_now()
        row = PageModel(
            id=generate_ulid(), user_id=owner_id, created_at=now, updated_at=now, **values
        )
        self._write_files(row)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_create(
            EntityKind.PAGE.value, row.id, page_mapper.snapshot(row), actor_id=owner_id
        )
        return page_mapper.to_app(row)

    @wrap_errors("update", "Page", ErrorMessages.PAGE_UPDATE_FAILED)
    def update_page(self, page_id: str, data: PageUpdate, owner_id: str) -> Page:
        row = self._get_row(
            PageModel, page_id, ErrorMessages.PAGE_NOT_FOUND, user_id=owner_id
        )
        values = page_mapper.to_db(data, partial=True)
        if "title" in values:
            validate_required(values, ["title"])
        if "slug" in values:
            validate_required(values, ["slug"])
            validate_slug(values["slug"])
            self._ensure_unique_slug(
                PageModel, values["slug"], ErrorMessages.PAGE_DUPLICATE_SLUG, exclude_id=page_id
            )
        if values.get("status") == PUBLISHED and not values.get("published_at"):
            values["published_at"] = row.published_at or utc_now()
        if values.get("is_homepage"):
            self._unset_homepage(owner_id, keep_id=page_id)

        before = page_mapper.snapshot(row)
        old_slug = row.slug
        self._apply(row, values)
        if row.slug != old_slug:
            self._remove_files(old_slug)
        self._write_files(row)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_update(
            EntityKind.PAGE.value,
            row.id,
            before,
            page_mapper.snapshot(row),
            actor_id=owner_id,
        )
        return page_mapper.to_app(row)

    @wrap_errors("delete", "Page", ErrorMessages.PAGE_DELETE_FAILED)
    def delete_page(self, page_id: str, owner_id: str) -> None:
        row = self._get_row(
            PageModel, page_id, ErrorMessages.PAGE_NOT_FOUND, user_id=owner_id
        )
        before = page_mapper.snapshot(row)
        slug = row.slug
        self.db.delete(row)
        self.db.commit()
        self._remove_files(slug)

        self.audit.log_delete(EntityKind.PAGE.value, page_id, before, actor_id=owner_id)


class BlogService(_ContentService):
    """Service for blog posts, scoped to their owner."""

    @wrap_errors("fetch", "Blog posts", ErrorMessages.FETCH_FAILED)
    def list_blogs(self, owner_id: str, status: Optional[str] = None) -> List[Blog]:
        query = self.db.query(BlogModel).filter(BlogModel.user_id == owner_id)
        if status:
            query = query.filter(BlogModel.status == status)
        return blog_mapper.to_app_list(query.order_by(BlogModel.created_at.desc()).all())

    @wrap_errors("fetch", "Blog post")
    def get_blog(self, blog_id: str, owner_id: str) -> Blog:
        row = self._get_row(BlogModel, blog_id, ErrorMessages.BLOG_NOT_FOUND, user_id=owner_id)
        return blog_mapper.to_app(row)

    @wrap_errors("fetch", "Blog post")
    def get_blog_by_slug(self, slug: str) -> Blog:
        row = (
            self.db.query(BlogModel)
            .filter(BlogModel.slug == slug, BlogModel.status == PUBLISHED)
            .first()
        )
        if row is None:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.BLOG_NOT_FOUND,
                f"No published blog post with slug {slug!r}",
            )
        return blog_mapper.to_app(row)

    @wrap_errors("create", "Blog post", ErrorMessages.BLOG_CREATE_FAILED)
    def create_blog(self, data: BlogCreate, owner_id: str) -> Blog:
        validate_required(data.model_dump(), ["title", "content"])
        values = blog_mapper.to_db(data)
        values["slug"] = values.get("slug") or slugify(data.title)
        validate_required(values, ["slug"])
        validate_slug(values["slug"])
        self._ensure_unique_slug(BlogModel, values["slug"], ErrorMessages.BLOG_DUPLICATE_SLUG)
        if values.get("status") == PUBLISHED and not values.get("published_at"):
            values["published_at"] = utc_now()

        now = utc_now()
        row = BlogModel(
            id=generate_ulid(), user_id=owner_id, created_at=now, updated_at=now, **values
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_create(
            EntityKind.BLOG.value, row.id, blog_mapper.snapshot(row), actor_id=owner_id
        )
        return blog_mapper.to_app(row)

    @wrap_errors("update", "Blog post", ErrorMessages.BLOG_UPDATE_FAILED)
    def update_blog(self, blog_id: str, data: BlogUpdate, owner_id: str) -> Blog:
        row = self._get_row(BlogModel, blog_id, ErrorMessages.BLOG_NOT_FOUND, user_id=owner_id)
        values = blog_mapper.to_db(data, partial=True)
        validate_required(values, [f for f in ("title", "content", "slug") if f in values])
        if "slug" in values:
            validate_slug(values["slug"])
            self._ensure_unique_slug(
                BlogModel, values["slug"], ErrorMessages.BLOG_DUPLICATE_SLUG, exclude_id=blog_id
            )
        if values.get("status") == PUBLISHED and not values.get("published_at"):
            values["published_at"] = row.published_at or utc_now()

        before = blog_mapper.snapshot(row)
        self._apply(row, values)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_update(
            EntityKind.BLOG.value, row.id, before, blog_mapper.snapshot(row), actor_id=owner_id
        )
        return blog_mapper.to_app(row)

    @wrap_errors("delete", "Blog post", ErrorMessages.BLOG_DELETE_FAILED)
    def delete_blog(self, blog_id: str, owner_id: str) -> None:
        row = self._get_row(BlogModel, blog_id, ErrorMessages.BLOG_NOT_FOUND, user_id=owner_id)
        before = blog_mapper.snapshot(row)
        self.db.delete(row)
        self.db.commit()
        self.audit.log_delete(EntityKind.BLOG.value, blog_id, before, actor_id=owner_id)


class MediaService(_ContentService):
    """Service for the media library, scoped to its owner."""

    def __init__(self, db: Session, store: Optional[ObjectStore] = None):
        super().__init__(db)
        self.store = store

    @wrap_errors("fetch", "Media", ErrorMessages.FETCH_FAILED)
    def list_media(
        self,
        owner_id: str,
        folder: Optional[str] = None,
        file_type: Optional[str] = None,
    ) -> List[Media]:
        query = self.db.query(MediaModel).filter(MediaModel.user_id == owner_id)
        if folder:
            query = query.filter(MediaModel.folder == folder)
        if file_type:
            query = query.filter(MediaModel.file_type == file_type)
        return media_mapper.to_app_list(query.order_by(MediaModel.created_at.desc()).all())

    @wrap_errors("fetch", "Media")
    def get_media_item(self, media_id: str, owner_id: str) -> Media:
        row = self._get_row(MediaModel, media_id, ErrorMessages.MEDIA_NOT_FOUND, user_id=owner_id)
        return media_mapper.to_app(row)

    @wrap_errors("create", "Media", ErrorMessages.MEDIA_CREATE_FAILED)
    def create_media(self, data: MediaCreate, owner_id: str) -> Media:
        validate_required(data.model_dump(), ["title", "file_url", "file_type"])
        values = media_mapper.to_db(data)

        now = utc_now()
        row = MediaModel(
            id=generate_ulid(), user_id=owner_id, created_at=now, updated_at=now, **values
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_create(
            EntityKind.MEDIA.value, row.id, media_mapper.snapshot(row), actor_id=owner_id
        )
        return media_mapper.to_app(row)

    @wrap_errors("update", "Media", ErrorMessages.MEDIA_UPDATE_FAILED)
    def update_media(self, media_id: str, data: MediaUpdate, owner_id: str) -> Media:
        row = self._get_row(MediaModel, media_id, ErrorMessages.MEDIA_NOT_FOUND, user_id=owner_id)
        values = media_mapper.to_db(data, partial=True)
        validate_required(
            values, [f for f in ("title", "file_url", "file_type") if f in values]
        )

        before = media_mapper.snapshot(row)
        self._apply(row, values)
        self.db.commit()
        self.db.refresh(row)

        self.audit.log_update(
            EntityKind.MEDIA.value, row.id, before, media_mapper.snapshot(row), actor_id=owner_id
        )
        return media_mapper.to_app(row)

    @wrap_errors("delete", "Media", ErrorMessages.MEDIA_DELETE_FAILED)
    def delete_media(self, media_id: str, owner_id: str) -> None:
        """Delete a media item and, if it lives in the media bucket, its file."""
        row = self._get_row(MediaModel, media_id, ErrorMessages.MEDIA_NOT_FOUND, user_id=owner_id)
        before = media_mapper.snapshot(row)
        file_url = row.file_url
        self.db.delete(row)
        self.db.commit()

        if self.store is not None:
            path = self.store.path_from_public_url(MEDIA_BUCKET, file_url)
            if path:
                try:
                    self.store.remove(MEDIA_BUCKET, [path])
                except (OSError, ValueError) as e:
                    log_error(parse_storage_error(e), bucket=MEDIA_BUCKET, path=path)

        self.audit.log_delete(EntityKind.MEDIA.value, media_id, before, actor_id=owner_id)
