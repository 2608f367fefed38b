"""Selector -> rewriter -> emitter -> writer pipeline for `srcgen exports`."""

from __future__ import annotations

from typing import List

from ..config import SelectionConfig
from ..logging import get_logger
from ..models import ExportLine, ExportsResult
from .emitter import emit
from .rewriter import rewrite
from .selector import SourceSelector
from .writer import INDEX_FILENAME, IndexWriter


class ExportsGenerator:
    """Runs one aggregator pass and writes ``<out_dir>/index.ts``."""

    def __init__(
        self,
        selector: SourceSelector | None = None,
        writer: IndexWriter | None = None,
    ) -> None:
        self.selector = selector or SourceSelector()
        self.writer = writer or IndexWriter()
        self.logger = get_logger("exports")

    def run(self, config: SelectionConfig) -> ExportsResult:
        """Generate the index for ``config``.

        Every line is built before the file is touched, so a NamingError leaves
        any previous index in place.
        """
        self.logger.info("Scanning %s", config.base_dir)
        candidates = sorted(self.selector.select(config), key=lambda item: item.relative_path)
        self.logger.info("Selected %d candidate files", len(candidates))

        lines: List[ExportLine] = []
        for candidate in candidates:
            specifier = rewrite(candidate, config.base_dir, config.out_dir)
            line = emit(candidate, specifier, config)
            if line is None:
                self.logger.debug(
                    "No export rule for %s (extension %r); skipping",
                    candidate.relative_path,
                    candidate.extension,
                )
                continue
            lines.append(line)

        out_path = config.out_dir / INDEX_FILENAME
        self.writer.write(lines, out_path)
        self.logger.info("Wrote %d exports to %s", len(set(lines)), out_path)
        return ExportsResult(path=out_path, candidates=candidates, lines=sorted(set(lines)))


__all__ = ["ExportsGenerator"]
