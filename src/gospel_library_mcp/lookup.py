"""Book, chapter and talk lookup by name."""

from __future__ import annotations

import re
from collections.abc import Sequence

from gospel_library_mcp.errors import NotFound
from gospel_library_mcp.models import Book, Chapter, ConferenceTalk, ScriptureCollection

_QUOTES = re.compile(r"[“”‘’\"']")
_PUNCTUATION = re.compile(r'[^a-z0-9"\s]+')
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Fold a talk title for fuzzy comparison.

    Lower-cases, maps straight and curly quotes to ``"``, turns any other
    punctuation into spaces and collapses whitespace.
    """
    s = title.lower()
    s = _QUOTES.sub('"', s)
    s = _PUNCTUATION.sub(" ", s)
    s = _WHITESPACE.sub(" ", s)
    return s.strip()


def find_book(data: ScriptureCollection, collection: str, book: str) -> Book:
    for b in data.books:
        if b.book == book:
            return b
    raise NotFound(
        f"Book not found: {book} in {collection}", collection=collection, book=book
    )


def find_chapter(book: Book, chapter: int) -> Chapter:
    for c in book.chapters:
        if c.chapter == chapter:
            return c
    raise NotFound(
        f"Chapter not found: {chapter} in {book.book}",
        book=book.book,
        chapter=chapter,
    )


def find_talk(
    talks: Sequence[ConferenceTalk],
    session: str,
    title: str | None = None,
    slug: str | None = None,
) -> ConferenceTalk:
    """Find a talk by slug, then exact title, then normalized title.

    Normalized matching tries equality before containment. When several talks
    qualify at the same tier the first in session order wins.
    """
    if slug:
        for t in talks:
            if t.slug == slug:
                return t

    if title:
        for t in talks:
            if t.title == title:
                return t
        # A punctuation-only title normalizes to "" and would match anything
        wanted = normalize_title(title)
        if wanted:
            normalized = [(normalize_title(t.title), t) for t in talks]
            for norm, t in normalized:
                if norm == wanted:
                    return t
            for norm, t in normalized:
                if wanted in norm:
                    return t

    raise NotFound(
        f"Talk not found in {session}. Provided title={title or ''!r} "
        f"slug={slug or ''!r}. Use list_conference_talks to enumerate.",
        session=session,
        title=title,
        slug=slug,
    )
