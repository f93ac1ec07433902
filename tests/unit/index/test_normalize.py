from __future__ import annotations

import pytest

from helios.index import normalize, normalize_query, split_tokens


def test_normalize_strips_edge_punctuation_and_lowercases() -> None:
    assert normalize("Hello,") == "hello"
    assert normalize("(World)") == "world"
    assert normalize("--42--") == "42"


def test_normalize_keeps_interior_punctuation() -> None:
    assert normalize("Don't!") == "don't"
    assert normalize("e-mail.") == "e-mail"
    assert normalize("path/to/file.txt") == "path/to/file.txt"


@pytest.mark.parametrize("token", ["", "!!!", "...", "--", "**"])
def test_normalize_discards_tokens_without_alphanumerics(token: str) -> None:
    assert normalize(token) is None


def test_normalize_uses_unicode_alphanumerics() -> None:
    assert normalize("«Émile»") == "émile"
    assert normalize("Straße.") == "straße"
    assert normalize("١٢") == "١٢"


@pytest.mark.parametrize(
    "token",
    ["Hello,", "Don't!", "İstanbul", "İ", "ÅNGSTRÖM?", "a.b.c.", "'quoted'", "x"],
)
def test_normalize_is_idempotent(token: str) -> None:
    once = normalize(token)
    assert once is not None
    assert normalize(once) == once


def test_normalize_query_only_case_folds() -> None:
    assert normalize_query("Hello,") == "hello,"
    assert normalize_query("  MiXeD ") == "  mixed "


@pytest.mark.parametrize("token", ["नमस्ते", "दुनिया", "ดี", "ภาษาไทย"])
def test_normalize_keeps_trailing_vowel_signs(token: str) -> None:
    assert normalize(token) == token
    assert normalize(f"«{token}».") == token


def test_normalize_trims_before_lowercasing() -> None:
    assert normalize("İ") == normalize_query("İ")
    assert normalize("(İstanbul)") == normalize_query("İstanbul")


def test_normalize_keeps_other_alphabetic_symbols() -> None:
    assert normalize("Ⓐ!") == "ⓐ"


def test_split_tokens_uses_unicode_white_space() -> None:
    text = " one\ttwo\u00a0three\u3000four\x85five\n"
    assert split_tokens(text) == ["one", "two", "three", "four", "five"]
    assert split_tokens("a\x1fb\x1cc") == ["a\x1fb\x1cc"]
    assert split_tokens("") == []
