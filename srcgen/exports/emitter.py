"""Export line emission for plain and component modules."""

from __future__ import annotations

import re
from typing import Optional

from ..config import SelectionConfig
from ..models import CandidateFile, ExportLine

PLAIN_MODULE_EXTENSION = ".ts"
COMPONENT_EXTENSION = ".svelte"
MODULE_SUFFIX = ".js"

_SEGMENT_SEPARATOR = re.compile(r"[-_]")
_IDENTIFIER = re.compile(r"[^\W\d_][^\W_]*")


class NamingError(ValueError):
    """Raised when a component filename cannot become an exported identifier."""


def to_export_name(basename: str) -> str:
    """Convert a file basename to a PascalCase identifier (``user-card`` -> ``UserCard``).

    Raises NamingError for empty names, names starting with a digit, and names
    whose conversion is still not an identifier (``my.card``).
    """
    if not basename:
        raise NamingError("Cannot derive an export name from an empty basename")
    if basename[0].isdigit():
        raise NamingError(f"Export name cannot start with a digit: {basename!r}")

    name = "".join(
        segment[:1].upper() + segment[1:] for segment in _SEGMENT_SEPARATOR.split(basename)
    )
    if not _IDENTIFIER.fullmatch(name):
        raise NamingError(f"{basename!r} does not convert to a valid identifier (got {name!r})")
    return name


def emit(
    candidate: CandidateFile,
    import_specifier: str,
    config: SelectionConfig,
) -> Optional[ExportLine]:
    """Return the export line for ``candidate``, or None for unrecognised extensions."""
    if candidate.extension == PLAIN_MODULE_EXTENSION:
        suffix = MODULE_SUFFIX if config.is_module else ""
        return ExportLine(f'export * from "{import_specifier}{suffix}"')

    if candidate.extension == COMPONENT_EXTENSION:
        try:
            name = to_export_name(candidate.basename_without_ext)
        except NamingError as exc:
            raise NamingError(f"{candidate.relative_path}: {exc}") from exc
        # Components are imported by their real filename, never with the .js suffix.
        source = f"{import_specifier}{candidate.extension}"
        return ExportLine(f'export {{ default as {name} }} from "{source}"')

    return None


__all__ = [
    "COMPONENT_EXTENSION",
    "MODULE_SUFFIX",
    "NamingError",
    "PLAIN_MODULE_EXTENSION",
    "emit",
    "to_export_name",
]
