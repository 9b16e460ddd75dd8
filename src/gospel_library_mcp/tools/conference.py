"""MCP tools for General Conference talks."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from gospel_library_mcp.engine import LibraryEngine
from gospel_library_mcp.search import TALK_SEARCH_LIMIT


def register(mcp: FastMCP, engine: LibraryEngine) -> None:
    @mcp.tool()
    def list_conference_talks(session: str | None = None) -> dict:
        """List General Conference sessions, or the talks in one session.

        Args:
            session: Session in format YYYY-MM (e.g. "2024-10"). If omitted,
                returns an index of all sessions with talk counts.
        """
        return engine.list_conference_talks(session).model_dump()

    @mcp.tool()
    def get_conference_talk(
        session: str,
        title: str | None = None,
        slug: str | None = None,
        paragraph: int | None = None,
        paragraph_range: str | None = None,
    ) -> dict:
        """Retrieve a General Conference talk, optionally only some paragraphs.

        Provide either the exact title (with smart quotes if present) or the
        slug. If the exact title does not match, a normalized fuzzy match is
        tried.

        Args:
            session: Conference session in format YYYY-MM
            title: Talk title as listed by list_conference_talks
            slug: File-name style slug (e.g. "thus-shall-my-church-be-called")
            paragraph: Single paragraph number (1-based)
            paragraph_range: Range like "3-7" or relative positions
                "first:5" / "last:4"
        """
        return engine.get_conference_talk(
            session, title, slug, paragraph, paragraph_range
        ).model_dump(by_alias=True)

    @mcp.tool()
    def search_conference_talks(
        query: str,
        session: str | None = None,
        max_results: int = TALK_SEARCH_LIMIT,
    ) -> dict:
        """Full-text search (substring, case-insensitive) across General Conference talks.

        Returns matching paragraphs with session, title and speaker.

        Args:
            query: Search phrase (case-insensitive substring)
            session: Limit search to one session (YYYY-MM)
            max_results: Maximum paragraph matches to return (default 20)
        """
        return engine.search_conference_talks(
            query, session, max_results
        ).model_dump(by_alias=True)
