"""
Admin API Routes.

REST endpoints for portfolio content and the Collection/Exhibition groupings.
All endpoints are prefixed with /admin and require a bearer token, except
the public view counter.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import Field
from sqlalchemy.orm import Session

from ..auth import AuthUser, require_auth
from ..db.audit_service import AuditService
from ..db.base import get_db
from ..storage import ObjectStore, get_object_store
from .aggregation import AggregationService
from .artwork import ArtworkCreate, ArtworkUpdate
from .blog import BlogCreate, BlogUpdate
from .exhibition import ExhibitionEntry, ExhibitionKey
from .groupings import CollectionService, ExhibitionService
from .media import MediaCreate, MediaUpdate
from .page import PageCreate, PageUpdate
from .performance import PerformanceCreate, PerformanceUpdate
from .primitives import CamelModel
from .services import (
    ArtworkService,
    BlogService,
    MediaService,
    PageService,
    PerformanceService,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


def _wire(item: CamelModel) -> Dict[str, Any]:
    return item.model_dump(by_alias=True, mode="json")


def _wire_list(items: List[CamelModel]) -> List[Dict[str, Any]]:
    return [_wire(item) for item in items]


# =============================================================================
# Request bodies
# =============================================================================


class CollectionAssignRequest(CamelModel):
    artwork_ids: List[str] = Field(default_factory=list)
    collection_name: str = ""


class CollectionRemoveRequest(CamelModel):
    artwork_ids: List[str] = Field(default_factory=list)


class CollectionRenameRequest(CamelModel):
    new_name: str = ""


class ExhibitionKeyPayload(CamelModel):
    name: str = ""
    venue: str = ""
    dates: str = ""

    def to_key(self) -> ExhibitionKey:
        return ExhibitionKey(self.name, self.venue, self.dates)


class ExhibitionAddRequest(CamelModel):
    artwork_ids: List[str] = Field(default_factory=list)
    exhibition: ExhibitionEntry


class ExhibitionUpdateRequest(CamelModel):
    old_key: ExhibitionKeyPayload
    exhibition: ExhibitionEntry


class ExhibitionRemoveArtworksRequest(CamelModel):
    artwork_ids: List[str] = Field(default_factory=list)
    key: ExhibitionKeyPayload


# =============================================================================
# Artwork Endpoints
# =============================================================================


@router.get("/artworks")
async def list_artworks(
    status: Optional[str] = None,
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    availability: Optional[str] = None,
    series: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    include_drafts: bool = Query(False, alias="includeDrafts"),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> List[Dict[str, Any]]:
    """List artworks, optionally filtered."""
    artworks = ArtworkService(db).list_artworks(
        status=status,
        category=category,
        featured=featured,
        availability=availability,
        series=series,
        limit=limit,
        include_drafts=include_drafts,
    )
    return _wire_list(artworks)


@router.post("/artworks", status_code=201)
async def create_artwork(
    artwork: ArtworkCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(ArtworkService(db).create_artwork(artwork, actor_id=user.id))


@router.get("/artworks/{artwork_id}")
async def get_artwork(
    artwork_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(ArtworkService(db).get_artwork(artwork_id))


@router.patch("/artworks/{artwork_id}")
async def update_artwork(
    artwork_id: str,
    artwork: ArtworkUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    """Partially update an artwork. Send ``version`` to guard against lost updates."""
    return _wire(ArtworkService(db).update_artwork(artwork_id, artwork, actor_id=user.id))


@router.delete("/artworks/{artwork_id}", status_code=204)
async def delete_artwork(
    artwork_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Response:
    ArtworkService(db).delete_artwork(artwork_id, actor_id=user.id)
    return Response(status_code=204)


@router.post("/artworks/{artwork_id}/duplicate", status_code=201)
async def duplicate_artwork(
    artwork_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(ArtworkService(db).duplicate_artwork(artwork_id, actor_id=user.id))


@router.post("/artworks/{artwork_id}/views", status_code=204)
async def increment_artwork_views(
    artwork_id: str,
    db: Session = Depends(get_db),
) -> Response:
    """Count a public view (no authentication, never fails)."""
    ArtworkService(db).increment_artwork_views(artwork_id)
    return Response(status_code=204)


# =============================================================================
# Collection Endpoints
# =============================================================================


@router.get("/collections")
async def get_collections(
    include_drafts: bool = Query(True, alias="includeDrafts"),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, List[Dict[str, Any]]]:
    """Artworks grouped by collection name."""
    groups = AggregationService(db).get_artworks_by_collection(include_drafts)
    return {name: _wire_list(artworks) for name, artworks in groups.items()}


@router.get("/collections/series")
async def get_series(
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> List[str]:
    return AggregationService(db).get_artwork_series()


@router.post("/collections/assign")
async def assign_collection(
    request: CollectionAssignRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    count = CollectionService(db).update_artworks_collection(
        request.artwork_ids, request.collection_name, actor_id=user.id
    )
    return {"status": "success", "updated": count}


@router.post("/collections/remove")
async def remove_from_collection(
    request: CollectionRemoveRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    count = CollectionService(db).remove_artworks_from_collection(
        request.artwork_ids, actor_id=user.id
    )
    return {"status": "success", "updated": count}


@router.patch("/collections/{name}")
async def rename_collection(
    name: str,
    request: CollectionRenameRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    """Rename a collection; an existing target name merges the two."""
    count = CollectionService(db).rename_collection(
        name, request.new_name, actor_id=user.id
    )
    return {"status": "success", "updated": count}


@router.delete("/collections/{name}")
async def delete_collection(
    name: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    count = CollectionService(db).delete_collection(name, actor_id=user.id)
    return {"status": "success", "updated": count}


# =============================================================================
# Exhibition Endpoints
# =============================================================================


@router.get("/exhibitions")
async def get_exhibitions(
    include_drafts: bool = Query(True, alias="includeDrafts"),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> List[Dict[str, Any]]:
    """Exhibitions derived from artwork histories, most recent first."""
    return _wire_list(AggregationService(db).get_exhibitions(include_drafts))


@router.post("/exhibitions")
async def add_exhibition(
    request: ExhibitionAddRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    result = ExhibitionService(db).add_exhibition_to_artworks(
        request.artwork_ids, request.exhibition, actor_id=user.id
    )
    return _wire(result)


@router.put("/exhibitions")
async def update_exhibition(
    request: ExhibitionUpdateRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    result = ExhibitionService(db).update_exhibition(
        request.old_key.to_key(), request.exhibition, actor_id=user.id
    )
    return _wire(result)


@router.post("/exhibitions/delete")
async def delete_exhibition(
    key: ExhibitionKeyPayload,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    result = ExhibitionService(db).delete_exhibition(key.to_key(), actor_id=user.id)
    return _wire(result)


@router.post("/exhibitions/remove-artworks")
async def remove_artworks_from_exhibition(
    request: ExhibitionRemoveArtworksRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    result = ExhibitionService(db).remove_artworks_from_exhibition(
        request.artwork_ids, request.key.to_key(), actor_id=user.id
    )
    return _wire(result)


# =============================================================================
# Performance Endpoints
# =============================================================================


@router.get("/performances")
async def list_performances(
    status: Optional[str] = None,
    featured: Optional[bool] = None,
    category: Optional[str] = None,
    performance_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> List[Dict[str, Any]]:
    performances = PerformanceService(db).list_performances(
        status=status,
        featured=featured,
        category=category,
        performance_type=performance_type,
        search=search,
        limit=limit,
    )
    return _wire_list(performances)


@router.post("/performances", status_code=201)
async def create_performance(
    performance: PerformanceCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(PerformanceService(db).create_performance(performance, actor_id=user.id))


@router.get("/performances/{performance_id}")
async def get_performance(
    performance_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(PerformanceService(db).get_performance(performance_id))


@router.patch("/performances/{performance_id}")
async def update_performance(
    performance_id: str,
    performance: PerformanceUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(
        PerformanceService(db).update_performance(
            performance_id, performance, actor_id=user.id
        )
    )


@router.delete("/performances/{performance_id}", status_code=204)
async def delete_performance(
    performance_id: str,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
    user: AuthUser = Depends(require_auth),
) -> Response:
    """Delete a performance and its stored cover image and media."""
    PerformanceService(db, store).delete_performance(performance_id, actor_id=user.id)
    return Response(status_code=204)


# =============================================================================
# Page Endpoints
# =============================================================================


@router.get("/pages")
async def list_pages(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> List[Dict[str, Any]]:
    return _wire_list(PageService(db).list_pages(user.id, status=status))


@router.get("/pages/homepage")
async def get_homepage(
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Optional[Dict[str, Any]]:
    """The caller's published homepage, or null."""
    page = PageService(db).get_homepage(user.id)
    return _wire(page) if page is not None else None


@router.post("/pages", status_code=201)
async def create_page(
    page: PageCreate,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(PageService(db, store).create_page(page, owner_id=user.id))


@router.get("/pages/{page_id}")
async def get_page(
    page_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(PageService(db).get_page(page_id, owner_id=user.id))


@router.patch("/pages/{page_id}")
async def update_page(
    page_id: str,
    page: PageUpdate,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(PageService(db, store).update_page(page_id, page, owner_id=user.id))


@router.delete("/pages/{page_id}", status_code=204)
async def delete_page(
    page_id: str,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
    user: AuthUser = Depends(require_auth),
) -> Response:
    PageService(db, store).delete_page(page_id, owner_id=user.id)
    return Response(status_code=204)


# =============================================================================
# Blog Endpoints
# =============================================================================


@router.get("/blogs")
async def list_blogs(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> List[Dict[str, Any]]:
    return _wire_list(BlogService(db).list_blogs(user.id, status=status))


@router.post("/blogs", status_code=201)
async def create_blog(
    blog: BlogCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(BlogService(db).create_blog(blog, owner_id=user.id))


@router.get("/blogs/{blog_id}")
async def get_blog(
    blog_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(BlogService(db).get_blog(blog_id, owner_id=user.id))


@router.patch("/blogs/{blog_id}")
async def update_blog(
    blog_id: str,
    blog: BlogUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(BlogService(db).update_blog(blog_id, blog, owner_id=user.id))


@router.delete("/blogs/{blog_id}", status_code=204)
async def delete_blog(
    blog_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Response:
    BlogService(db).delete_blog(blog_id, owner_id=user.id)
    return Response(status_code=204)


# =============================================================================
# Media Endpoints
# =============================================================================


@router.get("/media")
async def list_media(
    folder: Optional[str] = None,
    file_type: Optional[str] = Query(None, alias="fileType"),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> List[Dict[str, Any]]:
    return _wire_list(
        MediaService(db).list_media(user.id, folder=folder, file_type=file_type)
    )


@router.post("/media", status_code=201)
async def create_media(
    media: MediaCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(MediaService(db).create_media(media, owner_id=user.id))


@router.get("/media/{media_id}")
async def get_media_item(
    media_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(MediaService(db).get_media_item(media_id, owner_id=user.id))


@router.patch("/media/{media_id}")
async def update_media(
    media_id: str,
    media: MediaUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> Dict[str, Any]:
    return _wire(MediaService(db).update_media(media_id, media, owner_id=user.id))


@router.delete("/media/{media_id}", status_code=204)
async def delete_media(
    media_id: str,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
    user: AuthUser = Depends(require_auth),
) -> Response:
    MediaService(db, store).delete_media(media_id, owner_id=user.id)
    return Response(status_code=204)


# =============================================================================
# Audit Endpoints
# =============================================================================


@router.get("/audit")
async def list_audit_entries(
    entity_kind: Optional[str] = Query(None, alias="entityKind"),
    entity_id: Optional[str] = Query(None, alias="entityId"),
    action: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_auth),
) -> List[Dict[str, Any]]:
    """Recent changes, newest first."""
    audit = AuditService(db)
    if entity_kind and entity_id:
        entries = audit.query_by_entity(entity_kind, entity_id, limit=limit)
    else:
        entries = audit.query_recent(limit=limit, entity_kind=entity_kind, action=action)
    return [entry.to_dict() for entry in entries]
