"""Case-insensitive substring search over (locator, unit) pairs."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import islice
from typing import TypeVar

from gospel_library_mcp.errors import InvalidScope
from gospel_library_mcp.models import AddressableUnit

L = TypeVar("L")
U = TypeVar("U", bound=AddressableUnit)

SCRIPTURE_SEARCH_LIMIT = 25
TALK_SEARCH_LIMIT = 20


def search_units(
    query: str, entries: Iterable[tuple[L, U]], limit: int
) -> list[tuple[L, U]]:
    """Return the first ``limit`` entries whose text contains ``query``.

    Matching is a case-folded substring test. ``entries`` is consumed lazily
    and traversal stops as soon as ``limit`` matches are collected, so the
    result is always a prefix of the full match list in traversal order.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    needle = query.casefold()
    matches = (entry for entry in entries if needle in entry[1].text.casefold())
    return list(islice(matches, limit))


def validate_scripture_scope(
    collection: str | None, book: str | None, chapter: int | None
) -> None:
    """Reject a narrower scope given without the broader scope it belongs to."""
    if book and not collection:
        raise InvalidScope(
            "If you specify a book you must also specify its collection."
        )
    if chapter is not None and not (collection and book):
        raise InvalidScope(
            "If you specify a chapter you must also specify collection and book."
        )
