"""
Archivist service interface.

The remote LLM service is an external collaborator; implementations wrap
whatever provider is in use and must return boundary-validated records
from ``shelfarchive.ingestion.schemas``.
"""

from abc import ABC, abstractmethod

from shelfarchive.ingestion.schemas import (
    AuthorRecordResponse,
    EnrichmentResponse,
    ScannedBook,
)
from shelfarchive.ingestion.url_normalizer import Vendor


class ArchivistClient(ABC):
    """Abstract base class for archivist service clients."""

    @abstractmethod
    async def scan_shelf(self, images: list[str]) -> list[ScannedBook]:
        """Read titles and authors from base64-encoded shelf photos."""
        pass

    @abstractmethod
    async def enrich_book(self, title: str, author: str) -> EnrichmentResponse:
        """Find ISBN, synopsis, cover and tropes for a book."""
        pass

    @abstractmethod
    async def fetch_by_external_id(self, vendor: Vendor, external_id: str) -> ScannedBook:
        """Resolve a vendor catalog id to a book record."""
        pass

    @abstractmethod
    async def sync_author(self, name: str) -> AuthorRecordResponse:
        """Fetch the full current record for an author."""
        pass
