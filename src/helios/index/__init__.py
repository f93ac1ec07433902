"""Indexing and lookup package."""

from .builder import build_index, log_skipped_file, read_text
from .discovery import DiscoveredFile, DiscoveryResult, discover_files, should_exclude
from .models import BuildProfile, InvertedIndex, SkippedFile
from .normalize import normalize, normalize_query, split_tokens
from .query import QueryEngine, found_line, lookup, not_found_line

__all__ = [
    "BuildProfile",
    "DiscoveredFile",
    "DiscoveryResult",
    "InvertedIndex",
    "QueryEngine",
    "SkippedFile",
    "build_index",
    "discover_files",
    "found_line",
    "log_skipped_file",
    "lookup",
    "normalize",
    "normalize_query",
    "not_found_line",
    "read_text",
    "should_exclude",
    "split_tokens",
]
