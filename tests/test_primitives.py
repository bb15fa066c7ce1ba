"""Tests for slug handling, ids and the camelCase base model."""

import pytest

from portfolio_admin.content.exhibition import BulkResult, ExhibitionEntry, ExhibitionKey
from portfolio_admin.content.primitives import (
    generate_ulid,
    is_valid_slug,
    slugify,
    validate_slug,
)
from portfolio_admin.errors import AppError, ErrorType


class TestSlugValidation:
    @pytest.mark.parametrize("slug", ["my-artwork-1", "a", "2024", "body-works"])
    def test_valid_slugs_pass(self, slug):
        assert is_valid_slug(slug)
        validate_slug(slug)

    @pytest.mark.parametrize(
        "slug", ["My Artwork", "my_artwork", "-leading", "trailing-", "double--hyphen"]
    )
    def test_invalid_slugs_raise_invalid_format(self, slug):
        with pytest.raises(AppError) as exc_info:
            validate_slug(slug)
        assert exc_info.value.type == ErrorType.INVALID_FORMAT
        assert exc_info.value.context["value"] == slug

    def test_empty_slug_is_allowed(self):
        """An absent slug is not a format error."""
        validate_slug(None)
        validate_slug("")


class TestSlugify:
    def test_title_to_slug(self):
        assert slugify("About Me") == "about-me"

    def test_punctuation_and_whitespace_collapse(self):
        assert slugify("  Hello,   World! ") == "hello-world"

    def test_accents_are_stripped(self):
        assert slugify("Café Crème") == "cafe-creme"

    def test_result_is_a_valid_slug(self):
        assert is_valid_slug(slugify("Notes on  Light & Shadow (2021)"))


def test_ulids_are_unique_and_sortable():
    first = generate_ulid()
    second = generate_ulid()
    assert first != second
    assert len(first) == 26


class TestExhibitionEntry:
    def test_nulls_become_empty(self):
        entry = ExhibitionEntry.model_validate(
            {"name": "Light Years", "venue": None, "exhibitionImages": None}
        )
        assert entry.venue == ""
        assert entry.exhibition_images == []

    def test_key_and_label(self):
        entry = ExhibitionEntry(name="Light Years", venue="Gallery One", dates="Jan 2024")
        assert entry.key == ExhibitionKey("Light Years", "Gallery One", "Jan 2024")
        assert entry.key.label() == "Light Years|Gallery One|Jan 2024"

    def test_key_fields_are_stripped(self):
        entry = ExhibitionEntry(name=" Light Years ", venue="Gallery One ", about=" x ")
        assert entry.key == ExhibitionKey("Light Years", "Gallery One", "")
        assert entry.about == " x "

    def test_undeclared_keys_are_kept(self):
        entry = ExhibitionEntry.model_validate({"name": "A", "location": "Berlin"})
        assert entry.model_dump(by_alias=True)["location"] == "Berlin"

    def test_blank_start_date_is_none(self):
        entry = ExhibitionEntry.model_validate({"name": "A", "startDate": "  "})
        assert entry.start_date is None


def test_bulk_result_touched_counts_unchanged_rows():
    result = BulkResult(succeeded=["a"], unchanged=["b"])
    result.fail("c", ErrorType.NOT_FOUND, "missing")
    assert result.touched == 2
    assert result.failed[0].error_type == "NOT_FOUND"
    assert result.model_dump(by_alias=True)["failed"][0]["errorType"] == "NOT_FOUND"
