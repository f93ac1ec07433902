"""Deterministic file discovery for index builds."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class DiscoveredFile:
    """Regular file found under the index root."""

    display_path: str
    relative_path: str


@dataclass(slots=True, frozen=True)
class DiscoveryResult:
    """Sorted discovered files and deterministic scan counters."""

    files: tuple[DiscoveredFile, ...]
    total_candidates: int
    excluded_by_glob: int


def discover_files(
    root: str,
    exclude_globs: tuple[str, ...] = (),
    on_unreadable_dir: Callable[[str, OSError], None] | None = None,
) -> DiscoveryResult:
    """Discover regular files under root, sorted by display path string.

    Display paths keep the root exactly as given, joined with entry names by
    the platform separator. Symlinks and special files are never yielded.
    """
    if os.path.isfile(root):
        single = DiscoveredFile(display_path=root, relative_path=os.path.basename(root))
        if exclude_globs and should_exclude(single.relative_path, exclude_globs):
            return DiscoveryResult(files=(), total_candidates=1, excluded_by_glob=1)
        return DiscoveryResult(files=(single,), total_candidates=1, excluded_by_glob=0)

    excluded_dir_names = _excluded_dir_names(exclude_globs)
    files: list[DiscoveredFile] = []
    total_candidates = 0
    excluded_by_glob = 0
    stack: list[tuple[str, str]] = [(root, "")]
    while stack:
        current, prefix = stack.pop()
        try:
            with os.scandir(current) as entries:
                ordered_entries = sorted(entries, key=lambda item: item.name)
        except OSError as error:
            if on_unreadable_dir is not None:
                on_unreadable_dir(current, error)
            continue
        for entry in reversed(ordered_entries):
            relative = f"{prefix}{entry.name}"
            if entry.is_dir(follow_symlinks=False):
                if entry.name in excluded_dir_names and should_exclude(
                    f"{relative}/", exclude_globs
                ):
                    continue
                stack.append((entry.path, f"{relative}/"))
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            total_candidates += 1
            if exclude_globs and should_exclude(relative, exclude_globs):
                excluded_by_glob += 1
                continue
            files.append(DiscoveredFile(display_path=entry.path, relative_path=relative))

    files.sort(key=lambda item: item.display_path)
    return DiscoveryResult(
        files=tuple(files),
        total_candidates=total_candidates,
        excluded_by_glob=excluded_by_glob,
    )


def should_exclude(relative_path: str, exclude_globs: tuple[str, ...]) -> bool:
    """Return True when a root-relative POSIX path matches an exclude glob."""
    anchored = f"/{relative_path}"
    return any(
        fnmatch.fnmatch(relative_path, pattern) or fnmatch.fnmatch(anchored, pattern)
        for pattern in exclude_globs
    )


def _excluded_dir_names(exclude_globs: tuple[str, ...]) -> set[str]:
    """Extract directory-name prunes from **/name/** glob patterns."""
    output: set[str] = set()
    for pattern in exclude_globs:
        if not pattern.startswith("**/") or not pattern.endswith("/**"):
            continue
        name = pattern[3:-3].strip("/")
        if not name:
            continue
        if any(char in name for char in "*?[]{}"):
            continue
        output.add(name)
    return output
