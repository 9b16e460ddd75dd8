"""Corpus provider: loads scripture and conference-talk JSON once.

Expected layout under the data directory::

    book-of-mormon.json
    doctrine-and-covenants.json
    new-testament.json
    old-testament.json
    pearl-of-great-price.json
    general-conference-talks/<YYYY-MM>/<slug>.json

Any scripture file that is missing or malformed aborts the load. Conference
talks are optional: if the directory is absent the corpus has no sessions.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, NamedTuple

from pydantic import ValidationError

from gospel_library_mcp.errors import CorpusLoadError, NotFound
from gospel_library_mcp.models import (
    ConferenceTalk,
    Paragraph,
    ScriptureCollection,
    Verse,
)

logger = logging.getLogger(__name__)

# Overrides the data directory search
DATA_ENV_VAR = "GOSPEL_LIBRARY_DATA"

SCRIPTURE_COLLECTIONS = (
    "book-of-mormon",
    "doctrine-and-covenants",
    "new-testament",
    "old-testament",
    "pearl-of-great-price",
)

TALKS_DIRNAME = "general-conference-talks"


class VerseLocator(NamedTuple):
    collection: str
    book: str
    chapter: int


def find_data_dir(explicit: str | os.PathLike[str] | None = None) -> Path:
    """Locate the corpus data directory.

    An explicit path or ``$GOSPEL_LIBRARY_DATA`` is used as-is and must
    exist. Otherwise ``data/`` next to the package is tried, then ``data/``
    in the working directory.
    """
    configured = explicit or os.environ.get(DATA_ENV_VAR)
    if configured:
        path = Path(configured)
        if not path.is_dir():
            raise FileNotFoundError(f"Corpus data directory not found: {path}")
        return path

    candidates = [Path(__file__).parent / "data", Path.cwd() / "data"]
    for path in candidates:
        if path.is_dir():
            return path

    raise FileNotFoundError(
        "Corpus data not found. "
        f"Searched: {', '.join(str(c) for c in candidates)}. "
        f"Set {DATA_ENV_VAR} or pass --data-dir."
    )


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusLoadError(f"Error loading {path}: {e}") from e


class Corpus:
    """Read-only snapshot of every loaded collection and session."""

    def __init__(
        self,
        scriptures: dict[str, ScriptureCollection],
        sessions: dict[str, list[ConferenceTalk]],
    ) -> None:
        self._scriptures = dict(scriptures)
        self._sessions = {s: tuple(sessions[s]) for s in sorted(sessions)}

    # --- Scriptures ---

    def collections(self) -> list[str]:
        return list(self._scriptures)

    def collection(self, name: str) -> ScriptureCollection:
        try:
            return self._scriptures[name]
        except KeyError:
            raise NotFound(
                f"Collection not found: {name}. Available: {self.collections()}",
                collection=name,
            ) from None

    def valid_books(self, collection: str) -> list[str]:
        return [b.book for b in self.collection(collection).books]

    def iter_verses(
        self,
        collection: str | None = None,
        book: str | None = None,
        chapter: int | None = None,
    ) -> Iterator[tuple[VerseLocator, Verse]]:
        """Yield verses in collection, book, chapter, verse order."""
        names = [collection] if collection else self.collections()
        for name in names:
            data = self._scriptures.get(name)
            if data is None:
                continue
            for b in data.books:
                if book and b.book != book:
                    continue
                for c in b.chapters:
                    if chapter is not None and c.chapter != chapter:
                        continue
                    locator = VerseLocator(name, b.book, c.chapter)
                    for v in c.verses:
                        yield locator, v

    # --- Conference talks ---

    def valid_sessions(self) -> list[str]:
        return list(self._sessions)

    def talks(self, session: str) -> tuple[ConferenceTalk, ...]:
        try:
            return self._sessions[session]
        except KeyError:
            raise NotFound(f"Session not found: {session}", session=session) from None

    def all_talks(self) -> list[ConferenceTalk]:
        return [t for talks in self._sessions.values() for t in talks]

    def iter_paragraphs(
        self, session: str | None = None
    ) -> Iterator[tuple[ConferenceTalk, Paragraph]]:
        """Yield paragraphs in session, talk, paragraph order."""
        talks = self.talks(session) if session else self.all_talks()
        for talk in talks:
            for p in talk.paragraphs:
                yield talk, p


def load_scriptures(data_dir: Path) -> dict[str, ScriptureCollection]:
    scriptures: dict[str, ScriptureCollection] = {}
    for collection in SCRIPTURE_COLLECTIONS:
        path = data_dir / f"{collection}.json"
        if not path.exists():
            raise CorpusLoadError(f"Error loading {collection}: {path} does not exist")
        try:
            data = ScriptureCollection.model_validate(_read_json(path))
        except ValidationError as e:
            raise CorpusLoadError(f"Error loading {path}: {e}") from e
        scriptures[collection] = data
        logger.info("Loaded %s with %d books", collection, len(data.books))
    return scriptures


def load_talks(data_dir: Path) -> dict[str, list[ConferenceTalk]]:
    base = data_dir / TALKS_DIRNAME
    if not base.is_dir():
        logger.warning("No conference talks found at %s, skipping", base)
        return {}

    sessions: dict[str, list[ConferenceTalk]] = {}
    for session_dir in sorted(base.iterdir()):
        if not session_dir.is_dir():
            continue
        session = session_dir.name
        for path in sorted(session_dir.glob("*.json")):
            raw = _read_json(path)
            if not isinstance(raw, dict) or not isinstance(raw.get("body"), list):
                logger.warning("Skipping talk without a body: %s", path)
                continue
            try:
                talk = ConferenceTalk.model_validate(
                    {**raw, "session": session, "slug": path.stem}
                )
            except ValidationError as e:
                raise CorpusLoadError(f"Error loading talk {path}: {e}") from e
            sessions.setdefault(session, []).append(talk)

    logger.info(
        "Loaded %d conference talks across %d sessions",
        sum(len(t) for t in sessions.values()),
        len(sessions),
    )
    return sessions


def load_corpus(data_dir: str | os.PathLike[str] | None = None) -> Corpus:
    """Load the full corpus or raise; partial corpora are never returned."""
    path = find_data_dir(data_dir)
    logger.info("Loading corpus from %s ...", path)
    return Corpus(load_scriptures(path), load_talks(path))
