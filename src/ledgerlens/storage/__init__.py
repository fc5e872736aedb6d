"""Structured and blob storage collaborators."""

from .base import BlobStorage, Row, StorageService
from .memory import InMemoryBlobStorage, InMemoryStorage
from .supabase import SupabaseBlobStorage, SupabaseStorage

__all__ = [
    "BlobStorage",
    "InMemoryBlobStorage",
    "InMemoryStorage",
    "Row",
    "StorageService",
    "SupabaseBlobStorage",
    "SupabaseStorage",
]
