"""Schema extraction: the extractor protocol and JSON snapshot sources.

Usage:
    from sqlpulse.extract import SnapshotExtractor, extract_side
"""

from sqlpulse.extract.base import ExtractionError, SchemaExtractor, extract_side
from sqlpulse.extract.snapshot import SnapshotExtractor, apply_dump_options, save_snapshot

__all__ = [
    "ExtractionError",
    "SchemaExtractor",
    "extract_side",
    "SnapshotExtractor",
    "apply_dump_options",
    "save_snapshot",
]
