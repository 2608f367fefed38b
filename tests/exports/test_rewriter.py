"""Tests for srcgen.exports.rewriter."""

from __future__ import annotations

from pathlib import Path

import pytest

from srcgen.exports.rewriter import rewrite
from srcgen.exports.selector import to_candidate


def test_same_directory_yields_dot_slash_basename(tmp_path: Path) -> None:
    src = tmp_path / "src"
    assert rewrite(to_candidate("a.ts"), src, src) == "./a"
    assert rewrite(to_candidate("card.svelte"), src, src) == "./card"


def test_nested_file_keeps_subdirectories(tmp_path: Path) -> None:
    src = tmp_path / "src"
    assert rewrite(to_candidate("lib/utils/format.ts"), src, src) == "./lib/utils/format"


def test_output_below_base_uses_parent_references(tmp_path: Path) -> None:
    src = tmp_path / "src"
    assert rewrite(to_candidate("a.ts"), src, src / "lib") == "../a"
    assert rewrite(to_candidate("a.ts"), src, src / "lib" / "deep") == "../../a"


def test_sibling_directories(tmp_path: Path) -> None:
    base = tmp_path / "src" / "components"
    out = tmp_path / "src" / "lib"
    assert rewrite(to_candidate("ui/card.svelte"), base, out) == "../components/ui/card"


def test_only_final_extension_is_stripped(tmp_path: Path) -> None:
    src = tmp_path / "src"
    assert rewrite(to_candidate("a.spec.ts"), src, src) == "./a.spec"
    assert rewrite(to_candidate("Makefile"), src, src) == "./Makefile"


@pytest.mark.parametrize(
    "relative",
    ["a.ts", "x/y/z.ts", "card.svelte", "deep/er/still/file.ts"],
)
@pytest.mark.parametrize("out", ["src", "src/lib", "other", "src/a/b/c"])
def test_specifier_is_never_bare(tmp_path: Path, relative: str, out: str) -> None:
    specifier = rewrite(to_candidate(relative), tmp_path / "src", tmp_path / out)
    assert specifier.startswith("./") or specifier.startswith("../")
    assert "\\" not in specifier
