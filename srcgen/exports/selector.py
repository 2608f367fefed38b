"""Candidate selection for the export aggregator."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Callable, List, Sequence, Set

from ..config import ConfigError, SelectionConfig
from ..logging import get_logger
from ..models import CandidateFile
from . import matcher

TYPES_ONLY_PATTERN = "**/types.ts"
BIN_EXCLUDE_PATTERN = "**/bin/**"

_GLOB_CHARS = ("*", "?", "[")

MatchFn = Callable[..., List[str]]


def effective_includes(config: SelectionConfig) -> List[str]:
    """Include patterns after the ``types_only`` override."""
    if config.types_only:
        return [TYPES_ONLY_PATTERN]
    return list(config.include_patterns)


def effective_excludes(config: SelectionConfig) -> List[str]:
    """Exclude patterns extended with the bin and skip-directory rules."""
    patterns = list(config.exclude_patterns)
    if not config.include_bin:
        patterns.append(BIN_EXCLUDE_PATTERN)
    patterns.extend(skip_dir_pattern(entry) for entry in config.skip_dirs)
    return patterns


def skip_dir_pattern(entry: str) -> str:
    """Turn a directory name into ``**/<name>/**``; glob entries pass through."""
    if any(char in entry for char in _GLOB_CHARS):
        return entry
    return f"**/{entry}/**"


def to_candidate(relative_path: str) -> CandidateFile:
    path = PurePosixPath(relative_path)
    extension = path.suffix
    basename = path.name[: -len(extension)] if extension else path.name
    return CandidateFile(
        relative_path=relative_path,
        extension=extension,
        basename_without_ext=basename,
    )


class SourceSelector:
    """Resolves a SelectionConfig into the set of candidate files."""

    def __init__(self, match_fn: MatchFn | None = None) -> None:
        self._match = match_fn or matcher.match
        self.logger = get_logger("exports.selector")

    def select(self, config: SelectionConfig) -> Set[CandidateFile]:
        """Return the candidate files under ``config.base_dir``."""
        base_dir = config.base_dir
        if not base_dir.exists():
            raise ConfigError(f"Base directory not found: {base_dir}")
        if not base_dir.is_dir():
            raise ConfigError(f"Base directory is not a directory: {base_dir}")

        includes = effective_includes(config)
        excludes = effective_excludes(config)
        self.logger.debug("Include patterns: %s", includes)
        self.logger.debug("Exclude patterns: %s", excludes)

        matched = self._match(
            base_dir,
            includes,
            excludes,
            files_only=True,
            follow_symlinks=True,
            include_hidden=False,
        )
        return {to_candidate(rel_path) for rel_path in self._drop_underscored(matched)}

    def _drop_underscored(self, paths: Sequence[str]) -> List[str]:
        # Patterns are caller supplied; underscore files stay private even if the
        # ignore list was overridden.
        kept: List[str] = []
        for rel_path in paths:
            if PurePosixPath(rel_path).name.startswith("_"):
                self.logger.debug("Skipping underscore-prefixed file %s", rel_path)
                continue
            kept.append(rel_path)
        return kept


__all__ = [
    "BIN_EXCLUDE_PATTERN",
    "SourceSelector",
    "TYPES_ONLY_PATTERN",
    "effective_excludes",
    "effective_includes",
    "skip_dir_pattern",
    "to_candidate",
]
