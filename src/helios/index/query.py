"""Exact-word lookup over a built index."""

from __future__ import annotations

from helios.index.models import InvertedIndex
from helios.index.normalize import normalize_query


def found_line(word: str, path: str) -> str:
    """Format one hit row."""
    return f"'{word}' found in {path}"


def not_found_line(word: str) -> str:
    """Format the single miss row."""
    return f"'{word}' not found in any file"


def lookup(index: InvertedIndex, query: str) -> list[str]:
    """Return one row per stored occurrence, or the not-found row."""
    word = normalize_query(query)
    paths = index.occurrences(word)
    if not paths:
        return [not_found_line(word)]
    return [found_line(word, path) for path in paths]


class QueryEngine:
    """Read-only lookups against one immutable index."""

    __slots__ = ("_index",)

    def __init__(self, index: InvertedIndex) -> None:
        self._index = index

    @property
    def index(self) -> InvertedIndex:
        """Return the wrapped index."""
        return self._index

    def lookup(self, query: str) -> list[str]:
        """Look up an exact (case-folded) word."""
        return lookup(self._index, query)
