"""Pathspec-backed glob matching over a directory tree."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, FrozenSet, Iterator, List, Sequence

from pathspec import PathSpec


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternatives, e.g. ``**/*.{ts,svelte}`` into two patterns.

    Nested and repeated groups are supported. A group without a comma, or with
    unbalanced braces, is kept literally.
    """
    start = pattern.find("{")
    while start != -1:
        depth = 0
        options: List[str] = []
        segment_start = start + 1
        for index in range(start, len(pattern)):
            char = pattern[index]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    options.append(pattern[segment_start:index])
                    break
            elif char == "," and depth == 1:
                options.append(pattern[segment_start:index])
                segment_start = index + 1
        else:
            return [pattern]

        if len(options) > 1:
            prefix, suffix = pattern[:start], pattern[index + 1 :]
            expanded: List[str] = []
            for option in options:
                expanded.extend(expand_braces(f"{prefix}{option}{suffix}"))
            return expanded
        start = pattern.find("{", start + 1)
    return [pattern]


def compile_patterns(patterns: Sequence[str]) -> PathSpec | None:
    """Compile glob patterns (after brace expansion) into a gitwildmatch spec."""
    lines: List[str] = []
    for pattern in patterns:
        for expanded in expand_braces(pattern):
            if expanded not in lines:
                lines.append(expanded)
    if not lines:
        return None
    return PathSpec.from_lines("gitwildmatch", lines)


def match(
    base_dir: Path,
    include_patterns: Sequence[str],
    exclude_patterns: Sequence[str],
    *,
    files_only: bool = True,
    follow_symlinks: bool = True,
    include_hidden: bool = False,
) -> List[str]:
    """Return sorted, unique posix paths under ``base_dir`` selected by the patterns.

    A path is selected when it matches at least one include pattern and no
    exclude pattern.
    """
    include_spec = compile_patterns(include_patterns)
    if include_spec is None:
        return []
    exclude_spec = compile_patterns(exclude_patterns)

    selected = set()
    for rel_path in _iter_entries(
        Path(base_dir),
        files_only=files_only,
        follow_symlinks=follow_symlinks,
        include_hidden=include_hidden,
    ):
        if not include_spec.match_file(rel_path):
            continue
        if exclude_spec is not None and exclude_spec.match_file(rel_path):
            continue
        selected.add(rel_path)
    return sorted(selected)


def _raise_walk_error(error: OSError) -> None:
    raise error


def _iter_entries(
    root: Path,
    *,
    files_only: bool,
    follow_symlinks: bool,
    include_hidden: bool,
) -> Iterator[str]:
    # Real paths of each pending directory's ancestors; a symlink that resolves
    # into its own ancestry is a cycle, any other alias is walked normally.
    lineage: Dict[str, FrozenSet[str]] = {}
    for dirpath, dirnames, filenames in os.walk(
        root, onerror=_raise_walk_error, followlinks=follow_symlinks
    ):
        real_dir = os.path.realpath(dirpath)
        ancestors = lineage.pop(dirpath, frozenset())
        if real_dir in ancestors:
            dirnames[:] = []
            continue

        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        if not include_hidden:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        dirnames.sort()

        branch = ancestors | {real_dir}
        for name in dirnames:
            lineage[os.path.join(dirpath, name)] = branch

        if not files_only:
            for name in dirnames:
                yield f"{rel_dir}/{name}" if rel_dir else name

        for filename in sorted(filenames):
            if not include_hidden and filename.startswith("."):
                continue
            if not (current_dir / filename).is_file():
                continue
            yield f"{rel_dir}/{filename}" if rel_dir else filename


__all__ = ["compile_patterns", "expand_braces", "match"]
