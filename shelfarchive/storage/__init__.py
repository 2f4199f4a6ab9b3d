"""
Storage Module for Shelf Archive

Archive records and their persistence:
- Dataclass models for books, shelves and authors
- JSON blob store (whole-archive reads and writes)
- Repository owning the in-memory archive
"""

from shelfarchive.storage.models import (
    ArchiveState,
    ArchiveSettings,
    AuthorPulse,
    AuthorRelease,
    Book,
    BookMetadata,
    Shelf,
    ShelfWithBooks,
    SourceLink,
    Theme,
)
from shelfarchive.storage.blob_store import JsonBlobStore
from shelfarchive.storage.archive_repository import ArchiveRepository

__all__ = [
    # Models
    "ArchiveState",
    "ArchiveSettings",
    "AuthorPulse",
    "AuthorRelease",
    "Book",
    "BookMetadata",
    "Shelf",
    "ShelfWithBooks",
    "SourceLink",
    "Theme",
    # Persistence
    "JsonBlobStore",
    "ArchiveRepository",
]
