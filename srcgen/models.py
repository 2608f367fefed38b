"""Core data models shared across the export aggregator."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass(frozen=True)
class CandidateFile:
    """A selected source file, relative to the scanned base directory."""

    relative_path: str
    extension: str
    basename_without_ext: str


@dataclass(frozen=True, order=True)
class ExportLine:
    """One fully formed line of the generated index."""

    text: str


@dataclass
class ExportsResult:
    """Outcome of an aggregator run."""

    path: Path
    candidates: List[CandidateFile] = field(default_factory=list)
    lines: List[ExportLine] = field(default_factory=list)
