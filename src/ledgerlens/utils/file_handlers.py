"""Extraction mode detection and content decoding utilities."""

from pathlib import Path

from ..core.models import ExtractionMode
from ..errors import UnsupportedInputError

# File extensions read as delimited tables; everything else is free text
TABULAR_EXTENSIONS = {".csv"}

# Encodings tried in order when decoding a document body. cp1252 leaves
# 0x81, 0x8D, 0x8F, 0x90 and 0x9D undefined, so not every byte string decodes.
TEXT_ENCODINGS = ("utf-8-sig", "cp1252")


def detect_extraction_mode(filename: str | None) -> ExtractionMode:
    """
    Decide how a document is read from its filename extension.

    Args:
        filename: Original filename

    Returns:
        TABULAR for ``.csv`` files, TEXT for anything else
    """
    if filename and Path(filename).suffix.lower() in TABULAR_EXTENSIONS:
        return ExtractionMode.TABULAR
    return ExtractionMode.TEXT


def decode_content(content: bytes, strict: bool = True) -> str:
    """
    Decode document bytes to text.

    Args:
        content: Raw document bytes
        strict: When False, undecodable bytes are replaced instead of rejected

    Raises:
        UnsupportedInputError: If strict and the content is binary or
            undecodable
    """
    if not strict:
        return content.decode("utf-8", errors="replace")

    if b"\x00" in content:
        raise UnsupportedInputError("Document contains binary data and cannot be read as text")

    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue

    raise UnsupportedInputError("Could not decode document with any supported encoding")


class FileHandler:
    """Enforce limits on downloaded documents."""

    def __init__(self, max_size_bytes: int = 25 * 1024 * 1024):
        self.max_size_bytes = max_size_bytes

    def check_size(self, content: bytes) -> None:
        """
        Raises:
            UnsupportedInputError: If content exceeds max size
        """
        if len(content) > self.max_size_bytes:
            raise UnsupportedInputError(
                f"File size {len(content)} bytes exceeds maximum "
                f"{self.max_size_bytes} bytes"
            )
