"""Tests for srcgen.exports.matcher."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from srcgen.exports.matcher import compile_patterns, expand_braces, match


def _touch(root: Path, *paths: str) -> None:
    for relative in paths:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("**/*.{ts,svelte}", ["**/*.ts", "**/*.svelte"]),
        ("a{b,c{d,e}}", ["ab", "acd", "ace"]),
        ("{a,b}{1,2}", ["a1", "a2", "b1", "b2"]),
        ("{x}", ["{x}"]),
        ("a{b,c", ["a{b,c"]),
        ("**/*.ts", ["**/*.ts"]),
    ],
)
def test_expand_braces(pattern: str, expected: list[str]) -> None:
    assert expand_braces(pattern) == expected


def test_compile_patterns_returns_none_without_patterns() -> None:
    assert compile_patterns([]) is None
    spec = compile_patterns(["**/*.{ts,svelte}"])
    assert spec is not None
    assert spec.match_file("deep/nested/card.svelte")
    assert not spec.match_file("notes.md")


def test_match_applies_includes_and_excludes(tmp_path: Path) -> None:
    _touch(
        tmp_path,
        "a.ts",
        "c.svelte",
        "notes.md",
        "nested/b.ts",
        "node_modules/pkg/index.ts",
    )

    result = match(tmp_path, ["**/*.{ts,svelte}"], ["**/node_modules/**"])

    assert result == ["a.ts", "c.svelte", "nested/b.ts"]


def test_match_skips_hidden_entries_by_default(tmp_path: Path) -> None:
    _touch(tmp_path, "a.ts", ".dot.ts", ".hidden/x.ts")

    assert match(tmp_path, ["**/*.ts"], []) == ["a.ts"]
    assert match(tmp_path, ["**/*.ts"], [], include_hidden=True) == [
        ".dot.ts",
        ".hidden/x.ts",
        "a.ts",
    ]


def test_match_without_includes_selects_nothing(tmp_path: Path) -> None:
    _touch(tmp_path, "a.ts")
    assert match(tmp_path, [], []) == []


def test_match_can_return_directories(tmp_path: Path) -> None:
    _touch(tmp_path, "nested/b.ts")

    # gitwildmatch: a directory pattern also covers everything below it.
    assert match(tmp_path, ["nested"], []) == ["nested/b.ts"]
    assert match(tmp_path, ["nested"], [], files_only=False) == ["nested", "nested/b.ts"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_match_follows_directory_symlinks_without_looping(tmp_path: Path) -> None:
    base = tmp_path / "base"
    outside = tmp_path / "outside"
    _touch(base, "a.ts")
    _touch(outside, "shared.ts")
    try:
        (base / "linked").symlink_to(outside, target_is_directory=True)
        (base / "loop").symlink_to(base, target_is_directory=True)
    except OSError:  # pragma: no cover - platform without symlink privileges
        pytest.skip("cannot create symlinks")

    result = match(base, ["**/*.ts"], [])

    assert "linked/shared.ts" in result
    assert "a.ts" in result
    assert not any(path.startswith("loop/") for path in result)
    assert match(base, ["**/*.ts"], [], follow_symlinks=False) == ["a.ts"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_match_walks_both_real_directory_and_its_alias(tmp_path: Path) -> None:
    _touch(tmp_path, "lib/x.ts")
    try:
        (tmp_path / "alias").symlink_to(tmp_path / "lib", target_is_directory=True)
    except OSError:  # pragma: no cover - platform without symlink privileges
        pytest.skip("cannot create symlinks")

    assert match(tmp_path, ["**/*.ts"], []) == ["alias/x.ts", "lib/x.ts"]


def test_match_raises_for_unreadable_directory(tmp_path: Path, deny_listing) -> None:
    _touch(tmp_path, "a.ts", "locked/b.ts")
    deny_listing(tmp_path / "locked")

    with pytest.raises(PermissionError) as excinfo:
        match(tmp_path, ["**/*.ts"], [])

    assert excinfo.value.filename.endswith("locked")
