"""
Entity mapper between database rows and application objects.

Each entity kind has one schema (``Artwork``, ``Page``, ...) declared with
storage field names and a camelCase alias generator. Decoding a row and
encoding a payload both go through that schema, so the two directions cannot
drift apart.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, List, Type, TypeVar

from pydantic import BaseModel

from ..db.base import Base
from ..db.models import ArtworkModel, BlogModel, MediaModel, PageModel, PerformanceModel
from .artwork import Artwork
from .blog import Blog
from .media import Media
from .page import Page
from .performance import Performance

S = TypeVar("S", bound=BaseModel)

# Set by the services, never taken from a payload.
MANAGED_COLUMNS = frozenset({"id", "user_id", "version", "created_at", "updated_at"})


def _storage_value(value: Any) -> Any:
    """Convert a schema value into something a column can hold.

    Nested models are stored with their wire (camelCase) keys so embedded
    JSON reads the same as the API.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, (list, tuple)):
        return [_storage_value(v) for v in value]
    return value


class EntityMapper(Generic[S]):
    """Bidirectional mapper for one entity kind."""

    def __init__(self, schema: Type[S], model: Type[Base]):
        self.schema = schema
        self.model = model
        self._columns = {
            c.key: c
            for c in model.__table__.columns
            if c.key not in MANAGED_COLUMNS
        }

    def to_app(self, row: Any) -> S:
        """Decode an ORM row (or a snake_case mapping) into the schema."""
        return self.schema.model_validate(row)

    def to_app_list(self, rows: Iterable[Any]) -> List[S]:
        return [self.to_app(row) for row in rows]

    def to_wire(self, row: Any) -> Dict[str, Any]:
        """Decode a row straight to its camelCase JSON form."""
        return self.to_app(row).model_dump(by_alias=True, mode="json")

    def to_db(self, payload: BaseModel, partial: bool = False) -> Dict[str, Any]:
        """Encode a create/update payload into column values.

        With ``partial`` only fields the caller actually supplied are
        included, and an explicit null is dropped for non-nullable columns.
        Fields without a matching column are ignored.
        """
        names = payload.model_fields_set if partial else type(payload).model_fields
        values: Dict[str, Any] = {}
        for name in names:
            column = self._columns.get(name)
            if column is None:
                continue
            value = getattr(payload, name)
            if partial and value is None and not column.nullable:
                continue
            values[name] = _storage_value(value)
        return values

    def snapshot(self, row: Any) -> Dict[str, Any]:
        """JSON-safe copy of a row for audit before/after records."""
        return self.to_wire(row)


artwork_mapper: EntityMapper[Artwork] = EntityMapper(Artwork, ArtworkModel)
performance_mapper: EntityMapper[Performance] = EntityMapper(
    Performance, PerformanceModel
)
page_mapper: EntityMapper[Page] = EntityMapper(Page, PageModel)
blog_mapper: EntityMapper[Blog] = EntityMapper(Blog, BlogModel)
media_mapper: EntityMapper[Media] = EntityMapper(Media, MediaModel)
