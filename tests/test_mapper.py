"""
Tests for the entity mapper.

Verifies:
- Rows decode into schemas with nested exhibition entries
- Wire form uses camelCase keys at every level
- Create payloads encode to column values, managed columns excluded
- Partial updates only carry supplied fields
"""

import pytest
from pydantic import ValidationError

from portfolio_admin.content.artwork import ArtworkCreate, ArtworkUpdate
from portfolio_admin.content.mapper import MANAGED_COLUMNS, artwork_mapper, page_mapper
from portfolio_admin.content.page import PageUpdate


def _row(**overrides):
    data = {
        "id": "01HZX",
        "title": "Figure Study",
        "series": "Body Works",
        "status": "published",
        "sort_order": 2,
        "tags": None,
        "media": ["a.jpg"],
        "exhibition_history": [
            {
                "name": "Light Years",
                "venue": "Gallery One",
                "dates": "Jan 2024",
                "coverImage": "cover.jpg",
                "otherArtists": "A. Person",
            }
        ],
        "version": 3,
    }
    data.update(overrides)
    return data


class TestDecode:
    def test_row_mapping_decodes(self):
        artwork = artwork_mapper.to_app(_row())
        assert artwork.series == "Body Works"
        assert artwork.tags == []
        assert artwork.exhibition_history[0].cover_image == "cover.jpg"
        assert artwork.exhibition_history[0].other_artists == "A. Person"

    def test_wire_form_is_camel_case(self):
        wire = artwork_mapper.to_wire(_row())
        assert wire["sortOrder"] == 2
        assert "sort_order" not in wire
        assert wire["viewsCount"] == 0
        entry = wire["exhibitionHistory"][0]
        assert entry["coverImage"] == "cover.jpg"
        assert entry["exhibitionImages"] == []
        assert entry["startDate"] is None


class TestEncode:
    def test_create_payload_to_columns(self):
        payload = ArtworkCreate.model_validate(
            {
                "title": "Figure Study",
                "sortOrder": 4,
                "dateCreated": "2020",
                "exhibitionHistory": [
                    {"name": "Light Years", "venue": "Gallery One", "coverImage": "c.jpg"}
                ],
            }
        )
        values = artwork_mapper.to_db(payload)

        assert values["sort_order"] == 4
        assert values["date_created"] == "2020"
        assert values["status"] == "draft"
        assert values["exhibition_history"][0]["coverImage"] == "c.jpg"
        assert not MANAGED_COLUMNS & values.keys()

    def test_partial_update_only_supplied_fields(self):
        values = artwork_mapper.to_db(ArtworkUpdate(title="New", version=3), partial=True)
        assert values == {"title": "New"}

    def test_partial_update_drops_null_for_required_columns(self):
        payload = ArtworkUpdate.model_validate({"description": None, "featured": None})
        values = artwork_mapper.to_db(payload, partial=True)
        assert values == {"description": None}

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            ArtworkCreate.model_validate({"title": "x", "bogus": 1})

    def test_page_update_keeps_explicit_false(self):
        values = page_mapper.to_db(PageUpdate(is_homepage=False), partial=True)
        assert values == {"is_homepage": False}

    def test_round_trip_preserves_nested_entries(self):
        payload = ArtworkCreate(
            title="Figure Study",
            exhibition_history=[{"name": "Light Years", "curator": "J. Doe"}],
        )
        values = artwork_mapper.to_db(payload)
        decoded = artwork_mapper.to_app({"id": "x", **values})
        assert decoded.exhibition_history[0].curator == "J. Doe"
