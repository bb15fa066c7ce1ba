"""
Common primitives for portfolio content.

These are the building blocks used across all content schemas.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from ulid import ULID

from ..errors import AppError, ErrorMessages, ErrorType

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def generate_ulid() -> str:
    """Generate a ULID for row IDs.

    ULIDs are lexicographically sortable and globally unique.
    """
    return str(ULID())


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))


def validate_slug(slug: Optional[str]) -> None:
    """Raise INVALID_FORMAT unless ``slug`` is empty or a well-formed slug.

    Well-formed: lowercase letters and digits in groups joined by single
    hyphens, e.g. ``my-artwork-1``.
    """
    if slug is None or slug == "":
        return
    if not is_valid_slug(slug):
        raise AppError(
            ErrorType.INVALID_FORMAT,
            ErrorMessages.INVALID_SLUG,
            f"Invalid slug: {slug!r}",
            {"field": "slug", "value": slug},
        )


def slugify(text: str) -> str:
    """Derive a slug from free text (e.g. a title).

    >>> slugify("  Hello, World! ")
    'hello-world'
    """
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    return re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")


def blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class CamelModel(BaseModel):
    """Base for every content schema.

    Fields are declared with their storage (snake_case) names and exposed on
    the wire in camelCase. Either spelling is accepted on input, and rows can
    be validated directly from ORM objects.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )
