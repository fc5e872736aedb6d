"""Utility modules."""

from .file_handlers import FileHandler, decode_content, detect_extraction_mode

__all__ = ["FileHandler", "decode_content", "detect_extraction_mode"]
