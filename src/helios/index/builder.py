"""One-shot inverted index construction."""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import asdict
from pathlib import Path

from helios.index.discovery import discover_files
from helios.index.models import BuildProfile, InvertedIndex, SkippedFile
from helios.index.normalize import normalize, split_tokens
from helios.logging import get_logger

logger = get_logger(__name__)

SkipSink = Callable[[SkippedFile], None]


def log_skipped_file(skipped: SkippedFile) -> None:
    """Default diagnostic sink: one warning per unreadable file."""
    logger.warning("skipping_unreadable_file", path=skipped.path, reason=skipped.reason)


def build_index(
    root: str | os.PathLike[str],
    *,
    exclude_globs: tuple[str, ...] = (),
    on_skip: SkipSink | None = None,
    profile: dict[str, object] | None = None,
) -> InvertedIndex:
    """Index every readable text file under root.

    Files are processed in sorted display-path order and tokens in the order
    they appear, so two builds over the same tree yield identical entries.
    Files that cannot be read or decoded as UTF-8 are reported to ``on_skip``
    and left out of the index.
    """
    started = time.perf_counter()
    sink = on_skip or log_skipped_file
    root_str = os.fspath(root)
    logger.info("index_build_started", root=root_str)

    discovery = discover_files(
        root_str,
        exclude_globs=exclude_globs,
        on_unreadable_dir=_log_unreadable_dir,
    )
    discovery_seconds = time.perf_counter() - started

    entries: dict[str, list[str]] = {}
    indexed: list[str] = []
    skipped: list[SkippedFile] = []
    token_count = 0
    read_seconds = 0.0
    for discovered in discovery.files:
        path = discovered.display_path
        read_started = time.perf_counter()
        try:
            contents = read_text(path)
        except (OSError, UnicodeDecodeError) as error:
            read_seconds += time.perf_counter() - read_started
            record = SkippedFile(path=path, reason=_describe_error(error))
            skipped.append(record)
            sink(record)
            continue
        read_seconds += time.perf_counter() - read_started
        indexed.append(path)
        for token in split_tokens(contents):
            token_count += 1
            word = normalize(token)
            if word is None:
                continue
            entries.setdefault(word, []).append(path)

    index = InvertedIndex(
        {word: tuple(paths) for word, paths in entries.items()},
        files=tuple(indexed),
        skipped=tuple(skipped),
    )
    total_seconds = time.perf_counter() - started
    payload = BuildProfile(
        discovered_files=len(discovery.files),
        excluded_by_glob=discovery.excluded_by_glob,
        indexed_files=len(indexed),
        skipped_files=len(skipped),
        token_count=token_count,
        word_count=len(index),
        discovery_seconds=discovery_seconds,
        read_seconds=read_seconds,
        total_seconds=total_seconds,
    )
    if profile is not None:
        profile.update(asdict(payload))
    logger.info(
        "index_build_finished",
        root=root_str,
        indexed_files=payload.indexed_files,
        skipped_files=payload.skipped_files,
        words=payload.word_count,
        seconds=round(total_seconds, 3),
    )
    return index


def read_text(path: str) -> str:
    """Read a whole file as strict UTF-8 text."""
    return Path(path).read_bytes().decode("utf-8")


def _describe_error(error: OSError | UnicodeDecodeError) -> str:
    if isinstance(error, UnicodeDecodeError):
        return "not valid UTF-8 text"
    return error.strerror or type(error).__name__


def _log_unreadable_dir(path: str, error: OSError) -> None:
    logger.warning("directory_unreadable", path=path, reason=error.strerror or str(error))
