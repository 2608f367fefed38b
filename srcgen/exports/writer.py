"""Serialisation of the generated index file."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .. import fs
from ..models import ExportLine

INDEX_FILENAME = "index.ts"
HEADER = "// Created by srcgen generate-package-exports"


def render(lines: Iterable[ExportLine]) -> str:
    """Return the index contents: header, blank line, then lines in codepoint order."""
    body = sorted({line.text for line in lines})
    if not body:
        return f"{HEADER}\n\n"
    return f"{HEADER}\n\n" + "\n".join(body) + "\n"


class IndexWriter:
    """Writes export lines to the aggregator artifact, replacing prior content."""

    def write(self, lines: Iterable[ExportLine], out_path: Path) -> str:
        content = render(lines)
        fs.write_text(out_path, content)
        return content


__all__ = ["HEADER", "INDEX_FILENAME", "IndexWriter", "render"]
