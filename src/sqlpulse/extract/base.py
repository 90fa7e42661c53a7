"""Schema extraction protocol.

Defines the ``SchemaExtractor`` Protocol that every schema source
implements, and ``extract_side()`` which tags failures with the side
(source or target) they happened on.

Usage:
    from sqlpulse.extract.base import SchemaExtractor, extract_side

    def load(extractor: SchemaExtractor) -> DatabaseSchema:
        return extract_side("source", extractor, DumpOptions())
"""

import logging
from typing import Protocol

from sqlpulse.config.models import DumpOptions
from sqlpulse.schema.models import DatabaseSchema

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when a schema cannot be extracted.

    Attributes:
        side: ``"source"`` or ``"target"`` when known, else None.
    """

    def __init__(self, message: str, side: str | None = None):
        super().__init__(message)
        self.side = side


class SchemaExtractor(Protocol):
    """Anything that can produce a fully populated ``DatabaseSchema``."""

    def extract_schema(self, options: DumpOptions) -> DatabaseSchema:
        """Extract the schema, honouring category toggles and filters.

        Args:
            options: Which categories to include and which schemas/tables
                to keep.

        Returns:
            Fully populated ``DatabaseSchema``.

        Raises:
            ExtractionError: If the schema cannot be read.
        """
        ...


def extract_side(side: str, extractor: SchemaExtractor, options: DumpOptions) -> DatabaseSchema:
    """Run an extractor, naming the side in any failure.

    Failures are not retried.

    Raises:
        ExtractionError: With ``side`` set, chained to the original error.
    """
    logger.info("Extracting %s schema...", side)
    try:
        return extractor.extract_schema(options)
    except Exception as e:
        raise ExtractionError(f"Failed to extract {side} schema: {e}", side=side) from e
