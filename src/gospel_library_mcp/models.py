from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AddressableUnit(BaseModel):
    """A positioned piece of text inside an ordered container.

    ``position`` is 1-based and contiguous within its parent sequence
    (verse number within a chapter, paragraph index within a talk).
    """

    model_config = ConfigDict(populate_by_name=True)

    position: int
    text: str


class Verse(AddressableUnit):
    position: int = Field(alias="verse")
    reference: str = ""


class Paragraph(AddressableUnit):
    position: int = Field(alias="paragraph")


# --- Corpus shapes (as stored on disk) ---


class Chapter(BaseModel):
    chapter: int
    reference: str = ""
    verses: list[Verse]


class Book(BaseModel):
    book: str
    chapters: list[Chapter]


class ScriptureCollection(BaseModel):
    books: list[Book]


class ConferenceTalk(BaseModel):
    """One General Conference talk; ``session`` and ``slug`` come from its path."""

    speaker: str = ""
    title: str
    description: str | None = None
    body: list[str]
    audio: str | None = None
    pdf: str | None = None
    link: str | None = None
    sorting: str | None = None
    session: str  # e.g. 1971-04
    slug: str  # file name without .json

    @property
    def paragraphs(self) -> list[Paragraph]:
        return [Paragraph(position=i, text=p) for i, p in enumerate(self.body, 1)]


# --- Responses ---


class ChapterInfo(BaseModel):
    chapter: int
    verses: int


class BookInfo(BaseModel):
    book: str
    chapters: int
    chapter_details: list[ChapterInfo]


class CollectionBooks(BaseModel):
    collection: str
    books: list[str]


class ScriptureMatch(BaseModel):
    collection: str
    book: str
    chapter: int
    verse: int
    reference: str = ""
    text: str


class TalkMatch(BaseModel):
    session: str
    title: str
    speaker: str
    paragraph: int
    text: str


class SearchResult(BaseModel):
    """Matches in traversal order. ``count`` is the number returned, not a total."""

    query: str
    count: int
    results: list[ScriptureMatch | TalkMatch]


class TalkSummary(BaseModel):
    title: str
    speaker: str
    slug: str


class SessionSummary(BaseModel):
    session: str
    talks: int


class SessionIndex(BaseModel):
    sessions: list[SessionSummary]


class SessionListing(BaseModel):
    session: str
    talk_count: int
    talks: list[TalkSummary]


class TalkPassage(BaseModel):
    session: str
    title: str
    speaker: str
    paragraphs: list[Paragraph]


class TalkText(BaseModel):
    session: str
    title: str
    speaker: str
    description: str | None = None
    paragraphs: list[Paragraph]
    audio: str | None = None
    pdf: str | None = None
    link: str | None = None
