"""MCP tools for scripture structure, text and search."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from gospel_library_mcp.engine import LibraryEngine
from gospel_library_mcp.search import SCRIPTURE_SEARCH_LIMIT


def register(mcp: FastMCP, engine: LibraryEngine) -> None:
    @mcp.tool()
    def list_collections() -> list[dict]:
        """List scripture collections and the exact book names in each.

        Use these names for the collection and book arguments of the other
        scripture tools.
        """
        return [c.model_dump() for c in engine.list_collections()]

    @mcp.tool()
    def get_book_info(collection: str, book: str) -> dict:
        """IMPORTANT: Always use this tool to get accurate chapter and verse counts before referencing scriptures.

        Do NOT rely on your training data - scripture versions and verse
        numbering can vary. This tool provides the definitive structure for
        this specific scripture dataset.

        Args:
            collection: Scripture collection (e.g. "book-of-mormon")
            book: Exact book name as returned by list_collections (e.g. "Alma")
        """
        return engine.get_book_info(collection, book).model_dump()

    @mcp.tool()
    def get_scripture_text(
        collection: str,
        book: str,
        chapter: int,
        verse: int | None = None,
        verse_range: str | None = None,
    ) -> dict | list[dict]:
        """Get the actual text of scripture verses.

        ALWAYS use get_book_info first to verify valid chapter and verse
        ranges - do not assume you know the correct ranges from training data.
        With neither verse nor verse_range the whole chapter is returned.

        Args:
            collection: Scripture collection
            book: Book name - must match exactly as returned by list_collections
            chapter: Chapter number
            verse: Single verse number
            verse_range: "start-end" (e.g. "7-10") or relative positions
                like "first:3", "last:3"
        """
        result = engine.get_scripture_text(
            collection, book, chapter, verse, verse_range
        )
        if isinstance(result, list):
            return [v.model_dump(by_alias=True) for v in result]
        return result.model_dump(by_alias=True)

    @mcp.tool()
    def search_scriptures(
        query: str,
        collection: str | None = None,
        book: str | None = None,
        chapter: int | None = None,
        max_results: int = SCRIPTURE_SEARCH_LIMIT,
    ) -> dict:
        """Full-text search (substring, case-insensitive) across scriptures.

        Scope optionally by collection, book, and chapter for precision.
        Returns at most max_results verses in canonical order; count is the
        number returned, not the number that exist.

        Args:
            query: Search phrase (case-insensitive substring)
            collection: Limit search to one collection
            book: Exact book name (requires collection)
            chapter: Chapter number (requires collection and book)
            max_results: Max verse matches to return (default 25)
        """
        return engine.search_scriptures(
            query, collection, book, chapter, max_results
        ).model_dump(by_alias=True)
