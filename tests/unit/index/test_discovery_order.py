from __future__ import annotations

import os
from pathlib import Path

import pytest

from helios.index import discover_files


def test_discovery_sorts_by_display_path_string(tmp_path: Path) -> None:
    (tmp_path / "a").mkdir()
    (tmp_path / "a-b").mkdir()
    (tmp_path / "a" / "x.txt").write_text("x", encoding="utf-8")
    (tmp_path / "a-b" / "y.txt").write_text("y", encoding="utf-8")
    (tmp_path / "B.txt").write_text("b", encoding="utf-8")
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")

    result = discover_files(str(tmp_path))

    paths = [item.display_path for item in result.files]
    assert paths == sorted(paths)
    assert paths == [
        os.path.join(str(tmp_path), "B.txt"),
        os.path.join(str(tmp_path), "a-b", "y.txt"),
        os.path.join(str(tmp_path), "a.txt"),
        os.path.join(str(tmp_path), "a", "x.txt"),
    ]
    assert [item.relative_path for item in result.files] == [
        "B.txt",
        "a-b/y.txt",
        "a.txt",
        "a/x.txt",
    ]


def test_display_paths_keep_root_exactly_as_given(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("# Guide\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = discover_files("./")

    assert [item.display_path for item in result.files] == [
        os.path.join(".", "docs", "guide.md")
    ]


def test_discovery_skips_symlinks(tmp_path: Path) -> None:
    (tmp_path / "real.txt").write_text("real", encoding="utf-8")
    os.symlink(tmp_path / "real.txt", tmp_path / "link.txt")
    (tmp_path / "sub").mkdir()
    os.symlink(tmp_path / "sub", tmp_path / "sub-link")
    (tmp_path / "sub" / "inner.txt").write_text("inner", encoding="utf-8")

    result = discover_files(str(tmp_path))

    assert [item.relative_path for item in result.files] == ["real.txt", "sub/inner.txt"]


def test_root_that_is_a_file_yields_only_that_file(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("just me", encoding="utf-8")

    result = discover_files(str(target))

    assert [item.display_path for item in result.files] == [str(target)]


def test_missing_root_reports_directory_and_yields_nothing(tmp_path: Path) -> None:
    reported: list[str] = []

    result = discover_files(
        str(tmp_path / "missing"),
        on_unreadable_dir=lambda path, error: reported.append(path),
    )

    assert result.files == ()
    assert reported == [str(tmp_path / "missing")]


def test_exclude_globs_prune_directories_and_files(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_text("internal", encoding="utf-8")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "keep.txt").write_text("keep", encoding="utf-8")
    (tmp_path / "src" / "drop.log").write_text("drop", encoding="utf-8")

    result = discover_files(str(tmp_path), exclude_globs=("**/.git/**", "*.log"))

    assert [item.relative_path for item in result.files] == ["src/keep.txt"]
    assert result.excluded_by_glob == 1
    assert result.total_candidates == 2
