"""FastAPI HTTP layer wrapping LibraryEngine."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gospel_library_mcp import __version__
from gospel_library_mcp.engine import LibraryEngine
from gospel_library_mcp.errors import InvalidRangeFormat, InvalidScope, NotFound
from gospel_library_mcp.search import SCRIPTURE_SEARCH_LIMIT, TALK_SEARCH_LIMIT

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

engine = LibraryEngine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Refuse to serve with a missing or partial corpus
    engine.load()
    yield


app = FastAPI(
    title="Gospel Library API",
    description="Scripture and General Conference talk text over HTTP",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidRangeFormat)
@app.exception_handler(InvalidScope)
async def bad_request_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}


# --- Scriptures ---


@app.get("/api/collections")
def list_collections():
    """List scripture collections with their book names."""
    return [c.model_dump() for c in engine.list_collections()]


@app.get("/api/books/{collection}/{book}")
def get_book_info(collection: str, book: str):
    """Chapter and verse counts for one book."""
    return engine.get_book_info(collection, book).model_dump()


@app.get("/api/scripture")
def get_scripture_text(
    collection: str,
    book: str,
    chapter: int,
    verse: int | None = None,
    verse_range: str | None = None,
):
    """One verse, a verse range, or a whole chapter."""
    result = engine.get_scripture_text(collection, book, chapter, verse, verse_range)
    if isinstance(result, list):
        return [v.model_dump(by_alias=True) for v in result]
    return result.model_dump(by_alias=True)


@app.get("/api/search/scriptures")
def search_scriptures(
    query: str,
    collection: str | None = None,
    book: str | None = None,
    chapter: int | None = None,
    max_results: int = SCRIPTURE_SEARCH_LIMIT,
):
    """Case-insensitive substring search across scripture verses."""
    if max_results < 1:
        return JSONResponse(
            status_code=400, content={"detail": "max_results must be at least 1"}
        )
    return engine.search_scriptures(
        query, collection, book, chapter, max_results
    ).model_dump(by_alias=True)


# --- Conference talks ---


@app.get("/api/talks")
def list_sessions():
    """All conference sessions with talk counts."""
    return engine.list_conference_talks().model_dump()


@app.get("/api/talks/{session}")
def list_session_talks(session: str):
    """Talks in one session."""
    return engine.list_conference_talks(session).model_dump()


@app.get("/api/talk")
def get_conference_talk(
    session: str,
    title: str | None = None,
    slug: str | None = None,
    paragraph: int | None = None,
    paragraph_range: str | None = None,
):
    """A talk by slug or title, optionally limited to some paragraphs."""
    return engine.get_conference_talk(
        session, title, slug, paragraph, paragraph_range
    ).model_dump(by_alias=True)


@app.get("/api/search/talks")
def search_conference_talks(
    query: str,
    session: str | None = None,
    max_results: int = TALK_SEARCH_LIMIT,
):
    """Case-insensitive substring search across talk paragraphs."""
    if max_results < 1:
        return JSONResponse(
            status_code=400, content={"detail": "max_results must be at least 1"}
        )
    return engine.search_conference_talks(query, session, max_results).model_dump(
        by_alias=True
    )


def main():
    """Run the API server."""
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
