"""LedgerLens - document ingestion and automated audit analysis."""

__version__ = "0.1.0"
