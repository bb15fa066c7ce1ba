"""
Tests for the content CRUD services.

Covers artworks, performances, pages, blog posts and media, including the
files pages and performances keep in object storage.
"""

import json

import pytest

from portfolio_admin.content.artwork import ArtworkCreate, ArtworkUpdate
from portfolio_admin.content.blog import BlogCreate, BlogUpdate
from portfolio_admin.content.media import MediaCreate, MediaUpdate
from portfolio_admin.content.page import PageCreate, PageUpdate
from portfolio_admin.content.performance import PerformanceCreate, PerformanceUpdate
from portfolio_admin.content.services import (
    ArtworkService,
    BlogService,
    MediaService,
    PageService,
    PerformanceService,
    render_page_markdown,
)
from portfolio_admin.db.audit_service import AuditService
from portfolio_admin.errors import AppError, ErrorMessages, ErrorType

OWNER = "user-1"


class TestArtworkService:
    def test_create_and_get(self, db_session):
        service = ArtworkService(db_session)
        created = service.create_artwork(
            ArtworkCreate(title="Figure Study", slug="figure-study", tags=["ink"])
        )

        fetched = service.get_artwork(created.id)
        assert fetched.title == "Figure Study"
        assert fetched.tags == ["ink"]
        assert fetched.status == "draft"
        assert fetched.version == 1

    def test_invalid_slug_rejected(self, db_session):
        with pytest.raises(AppError) as exc_info:
            ArtworkService(db_session).create_artwork(ArtworkCreate(slug="My Artwork"))
        assert exc_info.value.type == ErrorType.INVALID_FORMAT

    def test_duplicate_slug_rejected(self, db_session, make_artwork):
        make_artwork(slug="figure-study")
        with pytest.raises(AppError) as exc_info:
            make_artwork(slug="figure-study")
        assert exc_info.value.type == ErrorType.DUPLICATE_ENTRY
        assert exc_info.value.user_message == ErrorMessages.ARTWORK_DUPLICATE_SLUG

    def test_list_hides_drafts_by_default(self, db_session, make_artwork):
        make_artwork(title="Draft")
        make_artwork(title="Live", status="published", category="drawing")
        service = ArtworkService(db_session)

        assert [a.title for a in service.list_artworks()] == ["Live"]
        assert len(service.list_artworks(include_drafts=True)) == 2
        assert [a.title for a in service.list_artworks(status="draft")] == ["Draft"]
        assert service.list_artworks(category="painting") == []

    def test_public_slug_lookup_needs_published(self, db_session, make_artwork):
        make_artwork(title="Draft", slug="draft-piece")
        with pytest.raises(AppError) as exc_info:
            ArtworkService(db_session).get_artwork_by_slug("draft-piece")
        assert exc_info.value.type == ErrorType.NOT_FOUND

    def test_update_increments_version(self, db_session, make_artwork):
        created = make_artwork(title="Old")
        updated = ArtworkService(db_session).update_artwork(
            created.id, ArtworkUpdate(title="New", version=created.version)
        )
        assert updated.title == "New"
        assert updated.version == created.version + 1

    def test_update_with_stale_version_rejected(self, db_session, make_artwork):
        created = make_artwork(title="Old")
        service = ArtworkService(db_session)
        service.update_artwork(created.id, ArtworkUpdate(title="First"))

        with pytest.raises(AppError) as exc_info:
            service.update_artwork(
                created.id, ArtworkUpdate(title="Second", version=created.version)
            )
        assert exc_info.value.type == ErrorType.UPDATE_FAILED
        assert exc_info.value.user_message == ErrorMessages.CONCURRENT_MODIFICATION
        assert service.get_artwork(created.id).title == "First"

    def test_blank_series_clears_collection(self, db_session, make_artwork):
        created = make_artwork(title="A", series="S")
        updated = ArtworkService(db_session).update_artwork(
            created.id, ArtworkUpdate(series="  ")
        )
        assert updated.series is None

    def test_update_unknown_is_not_found(self, db_session):
        with pytest.raises(AppError) as exc_info:
            ArtworkService(db_session).update_artwork("missing", ArtworkUpdate(title="x"))
        assert exc_info.value.type == ErrorType.NOT_FOUND

    def test_delete(self, db_session, make_artwork):
        created = make_artwork(title="A")
        service = ArtworkService(db_session)
        service.delete_artwork(created.id)

        with pytest.raises(AppError):
            service.get_artwork(created.id)
        [entry] = AuditService(db_session).query_by_entity("Artwork", created.id, limit=1)
        assert entry.action == "deleted"

    def test_duplicate_makes_unfeatured_draft(self, db_session, make_artwork):
        original = make_artwork(
            title="Figure Study",
            slug="figure-study",
            status="published",
            featured=True,
            series="Body Works",
        )
        service = ArtworkService(db_session)

        copy = service.duplicate_artwork(original.id)
        second = service.duplicate_artwork(original.id)

        assert copy.id != original.id
        assert copy.title == "Figure Study (Copy)"
        assert copy.slug == "figure-study-copy"
        assert copy.status == "draft"
        assert copy.featured is False
        assert copy.series == "Body Works"
        assert second.slug == "figure-study-copy-2"

    def test_views_counter(self, db_session, make_artwork):
        created = make_artwork(title="A")
        service = ArtworkService(db_session)
        service.increment_artwork_views(created.id)
        service.increment_artwork_views(created.id)
        service.increment_artwork_views("missing")

        artwork = service.get_artwork(created.id)
        assert artwork.views_count == 2
        assert artwork.version == created.version


class TestPerformanceService:
    def test_title_required(self, db_session):
        with pytest.raises(AppError) as exc_info:
            PerformanceService(db_session).create_performance(PerformanceCreate(title=" "))
        assert exc_info.value.type == ErrorType.REQUIRED_FIELD

    def test_filters_and_search(self, db_session):
        service = PerformanceService(db_session)
        service.create_performance(
            PerformanceCreate(title="Echoes", venue="The Roundhouse", status="published")
        )
        service.create_performance(
            PerformanceCreate(title="Quiet Hours", type="group", featured=True)
        )

        assert [p.title for p in service.list_performances(search="roundhouse")] == ["Echoes"]
        assert [p.title for p in service.list_performances(performance_type="group")] == [
            "Quiet Hours"
        ]
        assert [p.title for p in service.get_published_performances()] == ["Echoes"]
        assert service.get_featured_performances() == []

    def test_update(self, db_session):
        service = PerformanceService(db_session)
        created = service.create_performance(PerformanceCreate(title="Echoes"))
        updated = service.update_performance(
            created.id, PerformanceUpdate(venue="Hall", slug="echoes")
        )
        assert updated.venue == "Hall"
        assert updated.title == "Echoes"

    def test_delete_removes_stored_files(self, db_session, store):
        store.upload("performances", "covers/echoes.jpg", b"jpg")
        store.upload("performances", "gallery/one.jpg", b"jpg")
        cover_url = store.get_public_url("performances", "covers/echoes.jpg")
        service = PerformanceService(db_session, store)
        created = service.create_performance(
            PerformanceCreate(
                title="Echoes",
                cover_image=cover_url,
                media=["gallery/one.jpg", "https://video.example.test/clip"],
            )
        )

        service.delete_performance(created.id)

        bucket = store.root / "performances"
        assert not (bucket / "covers" / "echoes.jpg").exists()
        assert not (bucket / "gallery" / "one.jpg").exists()
        with pytest.raises(AppError) as exc_info:
            service.get_performance(created.id)
        assert exc_info.value.type == ErrorType.NOT_FOUND


class TestPageService:
    def test_create_writes_files(self, db_session, store):
        page = PageService(db_session, store).create_page(
            PageCreate(title="About Me", content="Hello", status="published"),
            owner_id=OWNER,
        )

        assert page.slug == "about-me"
        assert page.published_at is not None
        assert page.markdown_file_url == "https://cdn.example.test/storage/pages/about-me.md"

        markdown = (store.root / "pages" / "about-me.md").read_text()
        assert markdown.startswith("---\ntitle: About Me\nslug: about-me\n")
        assert "# About Me\n\nHello" in markdown
        data = json.loads((store.root / "pages" / "about-me.json").read_text())
        assert data["id"] == page.id
        assert data["contentType"] == "html"

    def test_create_without_store_has_no_file_urls(self, db_session):
        page = PageService(db_session).create_page(PageCreate(title="Contact"), owner_id=OWNER)
        assert page.markdown_file_url is None
        assert page.json_file_url is None

    def test_only_one_homepage_per_owner(self, db_session):
        service = PageService(db_session)
        first = service.create_page(
            PageCreate(title="Home", is_homepage=True, status="published"), owner_id=OWNER
        )
        other_owner = service.create_page(
            PageCreate(title="Elsewhere", is_homepage=True), owner_id="user-2"
        )
        second = service.create_page(
            PageCreate(title="New Home", is_homepage=True, status="published"),
            owner_id=OWNER,
        )

        assert service.get_page(first.id, OWNER).is_homepage is False
        assert service.get_page(other_owner.id, "user-2").is_homepage is True
        assert service.get_homepage(OWNER).id == second.id

    def test_draft_homepage_is_not_served(self, db_session):
        service = PageService(db_session)
        service.create_page(PageCreate(title="Home", is_homepage=True), owner_id=OWNER)
        assert service.get_homepage(OWNER) is None

    def test_pages_are_owner_scoped(self, db_session):
        service = PageService(db_session)
        page = service.create_page(PageCreate(title="Private"), owner_id=OWNER)

        assert service.list_pages("user-2") == []
        with pytest.raises(AppError) as exc_info:
            service.get_page(page.id, "user-2")
        assert exc_info.value.type == ErrorType.NOT_FOUND

    def test_slug_change_moves_files(self, db_session, store):
        service = PageService(db_session, store)
        page = service.create_page(PageCreate(title="About"), owner_id=OWNER)

        service.update_page(page.id, PageUpdate(slug="about-us"), owner_id=OWNER)

        bucket = store.root / "pages"
        assert not (bucket / "about.md").exists()
        assert (bucket / "about-us.md").exists()
        assert (bucket / "about-us.json").exists()

    def test_delete_removes_files(self, db_session, store):
        service = PageService(db_session, store)
        page = service.create_page(PageCreate(title="About"), owner_id=OWNER)

        service.delete_page(page.id, owner_id=OWNER)

        assert not (store.root / "pages" / "about.md").exists()
        assert service.list_pages(OWNER) == []

    def test_duplicate_slug(self, db_session):
        service = PageService(db_session)
        service.create_page(PageCreate(title="About"), owner_id=OWNER)
        with pytest.raises(AppError) as exc_info:
            service.create_page(PageCreate(title="About"), owner_id="user-2")
        assert exc_info.value.type == ErrorType.DUPLICATE_ENTRY

    def test_markdown_content_is_not_wrapped(self):
        rendered = render_page_markdown(
            {
                "title": "Notes",
                "slug": "notes",
                "contentType": "markdown",
                "status": "draft",
                "content": "## Already markdown",
            }
        )
        assert rendered.endswith("---\n\n## Already markdown\n")
        assert "metaTitle: Notes" in rendered


class TestBlogService:
    def test_content_required(self, db_session):
        with pytest.raises(AppError) as exc_info:
            BlogService(db_session).create_blog(BlogCreate(title="Hello"), owner_id=OWNER)
        assert exc_info.value.type == ErrorType.REQUIRED_FIELD
        assert exc_info.value.context == {"field": "content"}

    def test_create_publish_and_lookup(self, db_session):
        service = BlogService(db_session)
        blog = service.create_blog(
            BlogCreate(title="Studio Notes", content="...", status="published"),
            owner_id=OWNER,
        )
        assert blog.slug == "studio-notes"
        assert blog.published_at is not None
        assert service.get_blog_by_slug("studio-notes").id == blog.id

    def test_update_rejects_blank_title(self, db_session):
        service = BlogService(db_session)
        blog = service.create_blog(BlogCreate(title="A", content="b"), owner_id=OWNER)
        with pytest.raises(AppError) as exc_info:
            service.update_blog(blog.id, BlogUpdate(title=""), owner_id=OWNER)
        assert exc_info.value.type == ErrorType.REQUIRED_FIELD

    def test_delete(self, db_session):
        service = BlogService(db_session)
        blog = service.create_blog(BlogCreate(title="A", content="b"), owner_id=OWNER)
        service.delete_blog(blog.id, owner_id=OWNER)
        assert service.list_blogs(OWNER) == []


class TestMediaService:
    def test_file_url_required(self, db_session):
        with pytest.raises(AppError) as exc_info:
            MediaService(db_session).create_media(
                MediaCreate(title="Photo", file_type="image"), owner_id=OWNER
            )
        assert exc_info.value.context == {"field": "file_url"}

    def test_list_filters(self, db_session):
        service = MediaService(db_session)
        service.create_media(
            MediaCreate(title="A", file_url="u1", file_type="image", folder="studio"),
            owner_id=OWNER,
        )
        service.create_media(
            MediaCreate(title="B", file_url="u2", file_type="video"), owner_id=OWNER
        )
        assert [m.title for m in service.list_media(OWNER, folder="studio")] == ["A"]
        assert [m.title for m in service.list_media(OWNER, file_type="video")] == ["B"]
        assert service.list_media("user-2") == []

    def test_update(self, db_session):
        service = MediaService(db_session)
        item = service.create_media(
            MediaCreate(title="A", file_url="u1", file_type="image"), owner_id=OWNER
        )
        updated = service.update_media(item.id, MediaUpdate(alt_text="Studio"), owner_id=OWNER)
        assert updated.alt_text == "Studio"

    def test_delete_removes_bucket_file(self, db_session, store):
        store.upload("media", "photos/a.jpg", b"jpg")
        service = MediaService(db_session, store)
        item = service.create_media(
            MediaCreate(
                title="A",
                file_url=store.get_public_url("media", "photos/a.jpg"),
                file_type="image",
            ),
            owner_id=OWNER,
        )

        service.delete_media(item.id, owner_id=OWNER)

        assert not (store.root / "media" / "photos" / "a.jpg").exists()
        with pytest.raises(AppError):
            service.get_media_item(item.id, owner_id=OWNER)
