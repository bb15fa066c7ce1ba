"""
Read-side aggregation of Collections and Exhibitions.

Neither grouping has a table. A Collection is every artwork sharing a
non-empty ``series``; an Exhibition is every artwork whose
``exhibition_history`` holds an entry with the same ``ExhibitionKey``. The
pure functions here compute those groupings from mapped artworks, and
``AggregationService`` feeds them from the database.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

import structlog
from pydantic import Field
from sqlalchemy.orm import Session

from ..db.models import ArtworkModel
from ..errors import ErrorMessages, wrap_errors
from .artwork import Artwork
from .enums import PublicationStatus
from .exhibition import ExhibitionEntry, ExhibitionKey
from .mapper import artwork_mapper

logger = structlog.get_logger()


class Exhibition(ExhibitionEntry):
    """An exhibition with every artwork that was shown in it.

    Metadata comes from the first entry encountered for the key.
    """

    artworks: List[Artwork] = Field(default_factory=list)


# Collections


def _collection_order(artworks: Iterable[Artwork]) -> List[Artwork]:
    """Order by sort_order ascending, then most recently updated first."""
    by_updated = sorted(
        artworks,
        key=lambda a: a.updated_at.timestamp() if a.updated_at else float("-inf"),
        reverse=True,
    )
    return sorted(by_updated, key=lambda a: a.sort_order)


def group_collections(artworks: Iterable[Artwork]) -> Dict[str, List[Artwork]]:
    """Map each non-empty series name to its artworks, names in sorted order."""
    groups: Dict[str, List[Artwork]] = {}
    for artwork in artworks:
        if not artwork.series:
            continue
        groups.setdefault(artwork.series, []).append(artwork)
    return {name: _collection_order(groups[name]) for name in sorted(groups)}


def list_series(artworks: Iterable[Artwork]) -> List[str]:
    return sorted({a.series for a in artworks if a.series})


# Exhibition dates

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
_MONTH = (
    r"(?P<{name}>January|February|March|April|May|June|July|August|September|"
    r"October|November|December|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec)\.?"
)
_DAY = r"(?P<{name}>\d{{1,2}})(?:st|nd|rd|th)?"
_YEAR = r"(?P<year>\d{4})"

_DATE_PATTERNS = [
    # 2024-01-15
    re.compile(r"\b(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})\b"),
    # Jan 15 - Feb 20, 2024 (start of a range sharing one year)
    re.compile(
        r"\b" + _MONTH.format(name="month") + r"\s+" + _DAY.format(name="day")
        + r"\s*[-–—]\s*(?:" + _MONTH.format(name="month2") + r"\s+)?"
        + r"\d{1,2}(?:st|nd|rd|th)?,?\s+" + _YEAR + r"\b",
        re.IGNORECASE,
    ),
    # Jan 15, 2024
    re.compile(
        r"\b" + _MONTH.format(name="month") + r"\s+" + _DAY.format(name="day")
        + r",?\s+" + _YEAR + r"\b",
        re.IGNORECASE,
    ),
    # 15 January 2024
    re.compile(
        r"\b" + _DAY.format(name="day") + r"\s+" + _MONTH.format(name="month")
        + r",?\s+" + _YEAR + r"\b",
        re.IGNORECASE,
    ),
    # Jan 2024
    re.compile(
        r"\b" + _MONTH.format(name="month") + r",?\s+" + _YEAR + r"\b",
        re.IGNORECASE,
    ),
    # 2024
    re.compile(r"\b(?P<year>1[5-9]\d{2}|2\d{3})\b"),
]


def _month_number(token: str) -> int:
    if token.isdigit():
        return int(token)
    return _MONTHS[token[:3].lower()]


def parse_exhibition_date(text: Optional[str]) -> Optional[date]:
    """Best-effort parse of a free-text date range.

    Returns the first recognisable calendar date in ``text``. Missing parts
    default to the first month or day, so "Jan 2024" is 2024-01-01.

    >>> parse_exhibition_date("March 3 - April 20, 2023")
    datetime.date(2023, 3, 3)
    >>> parse_exhibition_date("ongoing") is None
    True
    """
    if not text:
        return None

    best: Optional[Tuple[int, int, date]] = None
    for rank, pattern in enumerate(_DATE_PATTERNS):
        for match in pattern.finditer(text):
            parts = match.groupdict()
            try:
                candidate = date(
                    int(parts["year"]),
                    _month_number(parts["month"]) if parts.get("month") else 1,
                    int(parts["day"]) if parts.get("day") else 1,
                )
            except ValueError:
                continue
            # Earliest position wins; at the same position the more specific pattern.
            if best is None or (match.start(), rank) < best[:2]:
                best = (match.start(), rank, candidate)
            break
    return best[2] if best else None


def exhibition_date(entry: ExhibitionEntry) -> Optional[date]:
    return entry.start_date or parse_exhibition_date(entry.dates)


def group_exhibitions(artworks: Iterable[Artwork]) -> List[Exhibition]:
    """Group embedded exhibition entries by key, most recent first.

    Exhibitions without a usable date sort last; ties keep first-seen order.
    """
    exhibitions: Dict[ExhibitionKey, Exhibition] = {}
    for artwork in artworks:
        if not artwork.exhibition_history:
            continue
        for entry in artwork.exhibition_history:
            key = entry.key
            exhibition = exhibitions.get(key)
            if exhibition is None:
                exhibition = Exhibition(**entry.model_dump())
                exhibitions[key] = exhibition
            if not any(a.id == artwork.id for a in exhibition.artworks):
                exhibition.artworks.append(artwork)

    dated = []
    undated = []
    for position, exhibition in enumerate(exhibitions.values()):
        when = exhibition_date(exhibition)
        if when is None:
            undated.append(exhibition)
        else:
            dated.append((-when.toordinal(), position, exhibition))
    dated.sort(key=lambda item: item[:2])
    return [item[2] for item in dated] + undated


class AggregationService:
    """Database-backed Collection and Exhibition views."""

    def __init__(self, db: Session):
        self.db = db

    def _artworks(self, include_drafts: bool = True):
        query = self.db.query(ArtworkModel)
        if not include_drafts:
            query = query.filter(ArtworkModel.status == PublicationStatus.PUBLISHED.value)
        return query

    @wrap_errors("fetch", "Collection", ErrorMessages.FETCH_FAILED)
    def get_artworks_by_collection(
        self, include_drafts: bool = True
    ) -> Dict[str, List[Artwork]]:
        rows = (
            self._artworks(include_drafts)
            .filter(ArtworkModel.series.isnot(None), ArtworkModel.series != "")
            .order_by(ArtworkModel.sort_order.asc(), ArtworkModel.updated_at.desc())
            .all()
        )
        return group_collections(artwork_mapper.to_app_list(rows))

    @wrap_errors("fetch", "Collection", ErrorMessages.FETCH_FAILED)
    def get_artwork_series(self) -> List[str]:
        rows = (
            self.db.query(ArtworkModel.series)
            .filter(ArtworkModel.series.isnot(None), ArtworkModel.series != "")
            .distinct()
            .all()
        )
        return sorted(series for (series,) in rows)

    @wrap_errors("fetch", "Exhibition", ErrorMessages.FETCH_FAILED)
    def get_exhibitions(self, include_drafts: bool = True) -> List[Exhibition]:
        rows = (
            self._artworks(include_drafts)
            .filter(ArtworkModel.exhibition_history.isnot(None))
            .order_by(ArtworkModel.sort_order.asc(), ArtworkModel.updated_at.desc())
            .all()
        )
        exhibitions = group_exhibitions(artwork_mapper.to_app_list(rows))
        logger.debug("exhibitions_aggregated", count=len(exhibitions), rows=len(rows))
        return exhibitions
