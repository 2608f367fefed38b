"""End-to-end tests for srcgen.exports.pipeline."""

from __future__ import annotations

import pytest

from srcgen.exports import ExportsGenerator, NamingError
from srcgen.exports.writer import HEADER
from tests._fixtures.tree_builder import SourceTreeBuilder


def _index(tree: SourceTreeBuilder, out: str = "src") -> str:
    return (tree.path(out) / "index.ts").read_text(encoding="utf-8")


def test_default_config_exports_modules_and_components(tree: SourceTreeBuilder) -> None:
    tree.touch(["src/a.ts", "src/_b.ts", "src/card.svelte"])

    result = ExportsGenerator().run(tree.selection())

    content = _index(tree)
    assert content == (
        f"{HEADER}\n"
        "\n"
        'export * from "./a.js"\n'
        'export { default as Card } from "./card.svelte"\n'
    )
    assert "_b" not in content
    assert result.path == tree.path("src").resolve() / "index.ts"
    assert [candidate.relative_path for candidate in result.candidates] == ["a.ts", "card.svelte"]


def test_types_only_exports_types_files(tree: SourceTreeBuilder) -> None:
    tree.touch(["src/types.ts", "src/other.ts", "src/nested/types.ts", "src/types.svelte"])

    ExportsGenerator().run(tree.selection(types_only=True))

    lines = _index(tree).splitlines()[2:]
    assert lines == ['export * from "./nested/types.js"', 'export * from "./types.js"']


def test_non_module_output_omits_js_suffix(tree: SourceTreeBuilder) -> None:
    tree.touch(["src/a.ts", "src/lib/b.ts", "src/view.svelte"])

    ExportsGenerator().run(tree.selection(is_module=False))

    lines = _index(tree).splitlines()[2:]
    assert lines == [
        'export * from "./a"',
        'export * from "./lib/b"',
        'export { default as View } from "./view.svelte"',
    ]


def test_dir_skip_excludes_directory(tree: SourceTreeBuilder) -> None:
    tree.touch(["src/legacy/x.ts", "src/keep/y.ts"])

    ExportsGenerator().run(tree.selection(skip_dirs=("legacy",)))

    content = _index(tree)
    assert "legacy" not in content
    assert 'export * from "./keep/y.js"' in content


def test_empty_directory_writes_header_only(tree: SourceTreeBuilder) -> None:
    result = ExportsGenerator().run(tree.selection())

    assert _index(tree) == f"{HEADER}\n\n"
    assert result.lines == []


def test_output_directory_outside_base(tree: SourceTreeBuilder) -> None:
    tree.touch(["src/components/user-card.svelte", "src/utils/math.ts"])

    ExportsGenerator().run(tree.selection(base="src", out="src/lib"))

    assert _index(tree, "src/lib").splitlines()[2:] == [
        'export * from "../utils/math.js"',
        'export { default as UserCard } from "../components/user-card.svelte"',
    ]


def test_rerun_is_byte_identical(tree: SourceTreeBuilder) -> None:
    tree.touch(["src/z.ts", "src/a/b.ts", "src/m-n.svelte", "src/notes.md"])
    config = tree.selection()

    ExportsGenerator().run(config)
    first = (tree.path("src") / "index.ts").read_bytes()
    ExportsGenerator().run(config)
    second = (tree.path("src") / "index.ts").read_bytes()

    assert first == second


def test_lines_are_sorted(tree: SourceTreeBuilder) -> None:
    tree.touch(["src/zeta.ts", "src/Alpha.svelte", "src/b/c.ts", "src/B.ts", "src/_x/y.ts"])

    ExportsGenerator().run(tree.selection())

    lines = _index(tree).splitlines()[2:]
    assert lines == sorted(lines)
    assert len(lines) == 4


def test_naming_error_keeps_previous_index(tree: SourceTreeBuilder) -> None:
    tree.touch(["src/a.ts"])
    config = tree.selection()
    ExportsGenerator().run(config)
    previous = _index(tree)

    tree.touch(["src/2col.svelte"])
    with pytest.raises(NamingError) as excinfo:
        ExportsGenerator().run(config)

    assert "2col.svelte" in str(excinfo.value)
    assert _index(tree) == previous


def test_unreadable_directory_aborts_and_keeps_previous_index(
    tree: SourceTreeBuilder, deny_listing
) -> None:
    tree.touch(["src/a.ts", "src/locked/b.ts"])
    tree.write({"src/index.ts": "// previous\n"})
    deny_listing(tree.path("src/locked"))

    with pytest.raises(OSError, match="locked"):
        ExportsGenerator().run(tree.selection())

    assert _index(tree) == "// previous\n"
