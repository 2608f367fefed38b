"""Import specifier computation for selected files."""

from __future__ import annotations

import os
from pathlib import Path

from ..models import CandidateFile


def rewrite(candidate: CandidateFile, base_dir: Path, out_dir: Path) -> str:
    """Return the extension-less import specifier of ``candidate`` as seen from ``out_dir``.

    The result always uses forward slashes and is never bare: it starts with
    ``./`` or ``../`` (or ``/`` when no relative path exists).
    """
    absolute = os.path.join(os.fspath(base_dir), *candidate.relative_path.split("/"))
    if candidate.extension:
        absolute = absolute[: -len(candidate.extension)]

    specifier = os.path.relpath(absolute, os.fspath(out_dir)).replace(os.sep, "/")
    specifier = specifier.replace("\\", "/")
    if not specifier.startswith((".", "/")):
        specifier = f"./{specifier}"
    return specifier


__all__ = ["rewrite"]
