"""Tests for linear substring search and scope validation."""

from collections.abc import Iterator

import pytest

from gospel_library_mcp.errors import InvalidScope
from gospel_library_mcp.models import Verse
from gospel_library_mcp.search import search_units, validate_scripture_scope

TEXTS = [
    "Now faith is the substance of things hoped for",
    "For by it the elders obtained a good report",
    "Through Faith we understand",
    "faith, hope, and charity",
    "Faithful in all things",
]


def entries() -> list[tuple[str, Verse]]:
    return [(f"loc{i}", Verse(position=i, text=t)) for i, t in enumerate(TEXTS, 1)]


class TestSearchUnits:
    def test_case_insensitive(self):
        upper = search_units("FAITH", entries(), limit=25)
        lower = search_units("faith", entries(), limit=25)
        assert upper == lower
        assert [loc for loc, _ in lower] == ["loc1", "loc3", "loc4", "loc5"]

    def test_single_match_carries_locator(self):
        result = search_units("charity", entries(), limit=25)
        assert len(result) == 1
        loc, verse = result[0]
        assert loc == "loc4"
        assert verse.text == "faith, hope, and charity"

    def test_limit_is_prefix_of_full_match_list(self):
        full = search_units("faith", entries(), limit=100)
        for limit in range(1, len(full) + 2):
            assert search_units("faith", entries(), limit=limit) == full[:limit]

    def test_stops_consuming_once_limit_reached(self):
        consumed = []

        def lazy() -> Iterator[tuple[str, Verse]]:
            for entry in entries():
                consumed.append(entry[0])
                yield entry
            raise AssertionError("traversal should have stopped")

        result = search_units("faith", lazy(), limit=2)
        assert [loc for loc, _ in result] == ["loc1", "loc3"]
        assert consumed == ["loc1", "loc2", "loc3"]

    def test_no_matches(self):
        assert search_units("zion", entries(), limit=10) == []

    def test_empty_query_matches_everything(self):
        assert len(search_units("", entries(), limit=10)) == len(TEXTS)

    def test_case_fold_is_not_just_lower(self):
        pairs = [("loc", Verse(position=1, text="STRASSE"))]
        assert search_units("straße", pairs, limit=1) == pairs

    @pytest.mark.parametrize("limit", [0, -1])
    def test_rejects_non_positive_limit(self, limit: int):
        with pytest.raises(ValueError, match="limit must be at least 1"):
            search_units("faith", entries(), limit=limit)


class TestScope:
    def test_book_without_collection(self):
        with pytest.raises(InvalidScope, match="book"):
            validate_scripture_scope(None, "Alma", None)

    def test_chapter_without_book(self):
        with pytest.raises(InvalidScope, match="chapter"):
            validate_scripture_scope("book-of-mormon", None, 32)

    def test_chapter_without_anything(self):
        with pytest.raises(InvalidScope):
            validate_scripture_scope(None, None, 1)

    @pytest.mark.parametrize(
        "collection,book,chapter",
        [
            (None, None, None),
            ("book-of-mormon", None, None),
            ("book-of-mormon", "Alma", None),
            ("book-of-mormon", "Alma", 32),
        ],
    )
    def test_valid_scopes(self, collection, book, chapter):
        validate_scripture_scope(collection, book, chapter)
