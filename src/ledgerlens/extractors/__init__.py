"""Document extractors for tabular and free-text input."""

from .base import BaseExtractor, ExtractionResult
from .tabular import TabularExtractor
from .text import TextExtractor

__all__ = [
    "BaseExtractor",
    "ExtractionResult",
    "TabularExtractor",
    "TextExtractor",
]
