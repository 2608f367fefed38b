"""Package export aggregation (`srcgen exports`)."""

from .emitter import NamingError, emit, to_export_name
from .pipeline import ExportsGenerator
from .rewriter import rewrite
from .selector import SourceSelector
from .writer import IndexWriter

__all__ = [
    "ExportsGenerator",
    "IndexWriter",
    "NamingError",
    "SourceSelector",
    "emit",
    "rewrite",
    "to_export_name",
]
