"""Base extractor interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..core.models import ExtractedTuple, ExtractionMode


@dataclass
class ExtractionResult:
    """Result from document extraction."""

    # How the document body was read
    mode: ExtractionMode

    # Tuples in document order
    transactions: list[ExtractedTuple] = field(default_factory=list)

    # Number of body lines examined (header excluded)
    lines_read: int = 0

    # Lines that looked financial but were dropped
    skipped_lines: int = 0

    @property
    def has_content(self) -> bool:
        """Check if extraction produced any tuples."""
        return bool(self.transactions)


class BaseExtractor(ABC):
    """Abstract base class for document extractors."""

    mode: ExtractionMode

    @abstractmethod
    def extract(self, content: bytes, filename: str | None = None) -> ExtractionResult:
        """
        Extract financial tuples from a document.

        Args:
            content: Raw file bytes
            filename: Original filename (optional, for log messages)

        Returns:
            ExtractionResult with the tuples found
        """
        pass
