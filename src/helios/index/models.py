"""Typed models for the in-memory word index."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(slots=True, frozen=True)
class SkippedFile:
    """A discovered file that could not be read as text."""

    path: str
    reason: str


@dataclass(slots=True, frozen=True)
class BuildProfile:
    """Deterministic diagnostics for one index build."""

    discovered_files: int
    excluded_by_glob: int
    indexed_files: int
    skipped_files: int
    token_count: int
    word_count: int
    discovery_seconds: float
    read_seconds: float
    total_seconds: float


class InvertedIndex(Mapping[str, tuple[str, ...]]):
    """Read-only mapping from normalized word to the paths containing it.

    Each occurrence of a word contributes one path entry, so a path repeats
    as often as the word appears in that file. Entries keep file processing
    order, then token order within the file.
    """

    __slots__ = ("_entries", "_files", "_skipped")

    def __init__(
        self,
        entries: Mapping[str, tuple[str, ...]],
        files: tuple[str, ...] = (),
        skipped: tuple[SkippedFile, ...] = (),
    ) -> None:
        self._entries = MappingProxyType(dict(entries))
        self._files = files
        self._skipped = skipped

    def __getitem__(self, word: str) -> tuple[str, ...]:
        return self._entries[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def files(self) -> tuple[str, ...]:
        """Indexed file paths in processing order."""
        return self._files

    @property
    def skipped(self) -> tuple[SkippedFile, ...]:
        """Files that were discovered but not indexed."""
        return self._skipped

    def occurrences(self, word: str) -> tuple[str, ...]:
        """Return stored paths for an exact key, empty when absent."""
        return self._entries.get(word, ())
