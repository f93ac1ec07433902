"""Token normalization shared by indexing and lookup."""

from __future__ import annotations

import regex

_CLUSTER_PATTERN = regex.compile(r"\X")
_WORD_START_PATTERN = regex.compile(r"[\p{Alphabetic}\p{N}]")
_WHITESPACE_PATTERN = regex.compile(r"\p{White_Space}+")


def split_tokens(text: str) -> list[str]:
    """Split text on runs of Unicode White_Space characters, dropping empties."""
    return [token for token in _WHITESPACE_PATTERN.split(text) if token]


def normalize(token: str) -> str | None:
    """Return the canonical index key for a token, or None when nothing remains.

    Edges are trimmed one grapheme cluster at a time: a cluster is kept when
    its base character is Alphabetic or Numeric, so combining vowel signs stay
    attached to their letter. The surviving text is then lowercased.
    """
    clusters = _CLUSTER_PATTERN.findall(token)
    start = 0
    end = len(clusters)
    while start < end and not _is_word_cluster(clusters[start]):
        start += 1
    while end > start and not _is_word_cluster(clusters[end - 1]):
        end -= 1
    if start == end:
        return None
    return "".join(clusters[start:end]).lower()


def normalize_query(query: str) -> str:
    """Case-fold a search query; punctuation is kept as typed."""
    return query.lower()


def _is_word_cluster(cluster: str) -> bool:
    return _WORD_START_PATTERN.match(cluster) is not None
