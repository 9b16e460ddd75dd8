"""Tests for book, chapter and talk lookup."""

import pytest

from gospel_library_mcp.errors import NotFound
from gospel_library_mcp.lookup import find_book, find_chapter, find_talk, normalize_title
from gospel_library_mcp.models import ConferenceTalk, ScriptureCollection


def talk(title: str, slug: str) -> ConferenceTalk:
    return ConferenceTalk(
        title=title, slug=slug, session="2024-10", speaker="Speaker", body=["p"]
    )


TALKS = [
    talk("“Come unto Christ”", "come-unto-christ"),
    talk("The Lord’s Way", "the-lords-way"),
    talk("Faith, Hope, and Charity", "faith-hope-charity"),
    talk("Charity Never Faileth", "charity-never-faileth"),
    talk("Charity!", "charity"),
]


class TestNormalizeTitle:
    def test_quotes_unified(self):
        assert normalize_title("The Lord’s Way") == normalize_title("The Lord's Way")
        assert normalize_title("“Come unto Christ”") == '"come unto christ"'

    def test_punctuation_and_whitespace(self):
        assert normalize_title("  Faith,  Hope -- and Charity! ") == "faith hope and charity"


class TestFindTalk:
    def test_by_slug(self):
        assert find_talk(TALKS, "2024-10", slug="the-lords-way") is TALKS[1]

    def test_slug_wins_over_title(self):
        found = find_talk(
            TALKS, "2024-10", title="Charity Never Faileth", slug="the-lords-way"
        )
        assert found is TALKS[1]

    def test_unknown_slug_falls_back_to_title(self):
        found = find_talk(TALKS, "2024-10", title="The Lord’s Way", slug="nope")
        assert found is TALKS[1]

    def test_exact_title(self):
        assert find_talk(TALKS, "2024-10", title="“Come unto Christ”") is TALKS[0]

    def test_normalized_equal(self):
        assert find_talk(TALKS, "2024-10", title="the lord's way") is TALKS[1]

    def test_normalized_contains(self):
        assert find_talk(TALKS, "2024-10", title="come unto christ") is TALKS[0]

    def test_equal_preferred_over_earlier_contains(self):
        assert find_talk(TALKS, "2024-10", title="charity") is TALKS[4]

    def test_first_contains_match_wins(self):
        assert find_talk(TALKS, "2024-10", title="charit") is TALKS[2]

    def test_not_found_carries_keys(self):
        with pytest.raises(NotFound) as exc_info:
            find_talk(TALKS, "2024-10", title="Missing Talk", slug="missing")
        assert exc_info.value.keys == {
            "session": "2024-10",
            "title": "Missing Talk",
            "slug": "missing",
        }

    @pytest.mark.parametrize("title", ["?!", "  ", "--"])
    def test_punctuation_only_title(self, title: str):
        with pytest.raises(NotFound):
            find_talk(TALKS, "2024-10", title=title)

    def test_nothing_provided(self):
        with pytest.raises(NotFound):
            find_talk(TALKS, "2024-10")


class TestFindBook:
    @pytest.fixture
    def collection(self) -> ScriptureCollection:
        return ScriptureCollection.model_validate(
            {
                "books": [
                    {
                        "book": "Alma",
                        "chapters": [
                            {"chapter": 32, "verses": [{"verse": 1, "text": "x"}]}
                        ],
                    }
                ]
            }
        )

    def test_exact_match(self, collection):
        assert find_book(collection, "book-of-mormon", "Alma").book == "Alma"

    def test_case_sensitive(self, collection):
        with pytest.raises(NotFound, match="Book not found: alma in book-of-mormon"):
            find_book(collection, "book-of-mormon", "alma")

    def test_chapter(self, collection):
        book = find_book(collection, "book-of-mormon", "Alma")
        assert find_chapter(book, 32).verses[0].position == 1
        with pytest.raises(NotFound, match="Chapter not found: 33 in Alma"):
            find_chapter(book, 33)
