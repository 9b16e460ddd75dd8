"""Query layer shared by the MCP tools and the HTTP API."""

from __future__ import annotations

import logging
import os

from gospel_library_mcp.corpus import Corpus, load_corpus
from gospel_library_mcp.errors import NotFound
from gospel_library_mcp.lookup import find_book, find_chapter, find_talk
from gospel_library_mcp.models import (
    BookInfo,
    Chapter,
    ChapterInfo,
    CollectionBooks,
    ScriptureMatch,
    SearchResult,
    SessionIndex,
    SessionListing,
    SessionSummary,
    TalkMatch,
    TalkPassage,
    TalkSummary,
    TalkText,
    Verse,
)
from gospel_library_mcp.ranges import resolve_range
from gospel_library_mcp.search import (
    SCRIPTURE_SEARCH_LIMIT,
    TALK_SEARCH_LIMIT,
    search_units,
    validate_scripture_scope,
)

logger = logging.getLogger(__name__)


class LibraryEngine:
    """Owns the corpus snapshot and answers scripture and talk queries."""

    def __init__(self, data_dir: str | os.PathLike[str] | None = None) -> None:
        self.data_dir = data_dir
        self._corpus: Corpus | None = None

    def load(self) -> Corpus:
        """Load the corpus now; errors propagate so a server can refuse to start."""
        return self._ensure_loaded()

    def _ensure_loaded(self) -> Corpus:
        if self._corpus is None:
            self._corpus = load_corpus(self.data_dir)
        return self._corpus

    # --- Scriptures ---

    def list_collections(self) -> list[CollectionBooks]:
        corpus = self._ensure_loaded()
        return [
            CollectionBooks(collection=c, books=corpus.valid_books(c))
            for c in corpus.collections()
        ]

    def get_book_info(self, collection: str, book: str) -> BookInfo:
        corpus = self._ensure_loaded()
        book_data = find_book(corpus.collection(collection), collection, book)
        details = [
            ChapterInfo(chapter=c.chapter, verses=len(c.verses))
            for c in book_data.chapters
        ]
        return BookInfo(
            book=book_data.book, chapters=len(details), chapter_details=details
        )

    def get_scripture_text(
        self,
        collection: str,
        book: str,
        chapter: int,
        verse: int | None = None,
        verse_range: str | None = None,
    ) -> Chapter | Verse | list[Verse]:
        """Return one verse, a resolved verse range, or the whole chapter."""
        corpus = self._ensure_loaded()
        book_data = find_book(corpus.collection(collection), collection, book)
        chapter_data = find_chapter(book_data, chapter)

        if verse is not None:
            found = (
                resolve_range(str(verse), chapter_data.verses, "verse range")
                if verse > 0
                else []
            )
            if not found:
                raise NotFound(
                    f"Verse not found: {verse} in {book} {chapter}",
                    collection=collection,
                    book=book,
                    chapter=chapter,
                    verse=verse,
                )
            return found[0]
        if verse_range:
            return resolve_range(verse_range, chapter_data.verses, "verse range")
        return chapter_data

    def search_scriptures(
        self,
        query: str,
        collection: str | None = None,
        book: str | None = None,
        chapter: int | None = None,
        max_results: int = SCRIPTURE_SEARCH_LIMIT,
    ) -> SearchResult:
        validate_scripture_scope(collection, book, chapter)
        corpus = self._ensure_loaded()
        if collection:
            data = corpus.collection(collection)
            if book:
                book_data = find_book(data, collection, book)
                if chapter is not None:
                    find_chapter(book_data, chapter)

        hits = search_units(
            query, corpus.iter_verses(collection, book, chapter), max_results
        )
        results = [
            ScriptureMatch(
                collection=loc.collection,
                book=loc.book,
                chapter=loc.chapter,
                verse=v.position,
                reference=v.reference,
                text=v.text,
            )
            for loc, v in hits
        ]
        logger.debug("search_scriptures %r: %d matches", query, len(results))
        return SearchResult(query=query, count=len(results), results=results)

    # --- Conference talks ---

    def list_conference_talks(
        self, session: str | None = None
    ) -> SessionIndex | SessionListing:
        corpus = self._ensure_loaded()
        if session:
            talks = corpus.talks(session)
            return SessionListing(
                session=session,
                talk_count=len(talks),
                talks=[
                    TalkSummary(title=t.title, speaker=t.speaker, slug=t.slug)
                    for t in talks
                ],
            )
        return SessionIndex(
            sessions=[
                SessionSummary(session=s, talks=len(corpus.talks(s)))
                for s in corpus.valid_sessions()
            ]
        )

    def get_conference_talk(
        self,
        session: str,
        title: str | None = None,
        slug: str | None = None,
        paragraph: int | None = None,
        paragraph_range: str | None = None,
    ) -> TalkMatch | TalkPassage | TalkText:
        """Return one paragraph, a resolved paragraph range, or the full talk."""
        corpus = self._ensure_loaded()
        talk = find_talk(corpus.talks(session), session, title=title, slug=slug)
        paragraphs = talk.paragraphs

        if paragraph is not None:
            found = (
                resolve_range(str(paragraph), paragraphs, "paragraph range")
                if paragraph > 0
                else []
            )
            if not found:
                raise NotFound(
                    f"Paragraph out of range 1-{len(paragraphs)}",
                    session=session,
                    slug=talk.slug,
                    paragraph=paragraph,
                )
            return TalkMatch(
                session=talk.session,
                title=talk.title,
                speaker=talk.speaker,
                paragraph=found[0].position,
                text=found[0].text,
            )
        if paragraph_range:
            return TalkPassage(
                session=talk.session,
                title=talk.title,
                speaker=talk.speaker,
                paragraphs=resolve_range(
                    paragraph_range, paragraphs, "paragraph range"
                ),
            )
        return TalkText(
            session=talk.session,
            title=talk.title,
            speaker=talk.speaker,
            description=talk.description,
            paragraphs=paragraphs,
            audio=talk.audio,
            pdf=talk.pdf,
            link=talk.link,
        )

    def search_conference_talks(
        self,
        query: str,
        session: str | None = None,
        max_results: int = TALK_SEARCH_LIMIT,
    ) -> SearchResult:
        corpus = self._ensure_loaded()
        hits = search_units(query, corpus.iter_paragraphs(session), max_results)
        results = [
            TalkMatch(
                session=t.session,
                title=t.title,
                speaker=t.speaker,
                paragraph=p.position,
                text=p.text,
            )
            for t, p in hits
        ]
        logger.debug("search_conference_talks %r: %d matches", query, len(results))
        return SearchResult(query=query, count=len(results), results=results)
