"""Exceptions raised by the corpus, lookup, range and search layers."""

from __future__ import annotations


class GospelLibraryError(Exception):
    """Base class for all request and load failures."""


class InvalidRangeFormat(GospelLibraryError, ValueError):
    """A range expression is not one of "first:k", "last:k", "a-b" or "n"."""

    def __init__(self, expression: str, kind: str = "range") -> None:
        self.expression = expression
        super().__init__(
            f"Invalid {kind} format: {expression!r}. "
            'Use formats like "7-10", "5", "first:3", or "last:3"'
        )


class InvalidScope(GospelLibraryError, ValueError):
    """A narrower search scope was given without the broader one it needs."""


class NotFound(GospelLibraryError, LookupError):
    """A book, chapter, verse, session, talk or paragraph does not exist."""

    def __init__(self, message: str, **keys: object) -> None:
        self.keys = keys
        super().__init__(message)


class CorpusLoadError(GospelLibraryError, RuntimeError):
    """The corpus could not be loaded; the server must not start."""
