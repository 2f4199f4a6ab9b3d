"""
Ingestion Service

Brings new books into the archive:
- Shelf photo scans
- Vendor links (Amazon, Goodreads, Play Books)
- Optional enrichment of each new book, one at a time
"""

from typing import Optional

from loguru import logger

from shelfarchive.exceptions import ExternalServiceError
from shelfarchive.ingestion.client import ArchivistClient
from shelfarchive.ingestion.enrichment import merge_enrichment
from shelfarchive.ingestion.url_normalizer import normalize_url
from shelfarchive.storage.archive_repository import ArchiveRepository
from shelfarchive.storage.models import Book


class ArchiveIngestor:
    """Service for adding scanned and linked books to the archive."""

    def __init__(self, repository: ArchiveRepository, client: ArchivistClient):
        """
        Initialize service.

        Args:
            repository: Archive receiving the new books
            client: Remote archivist service
        """
        self.repository = repository
        self.client = client

    @property
    def auto_enrich(self) -> bool:
        return self.repository.state.settings.auto_enrich

    async def ingest_scan(self, images: list[str], enrich: Optional[bool] = None) -> list[Book]:
        """
        Scan shelf photos and archive every book found.

        Args:
            images: Base64-encoded photos
            enrich: Override the archive's auto-enrich setting

        Returns:
            Newly added books
        """
        if not images:
            return []

        scanned = await self.client.scan_shelf(images)
        logger.info(f"Scan found {len(scanned)} books in {len(images)} images")

        added = self.repository.add_books(s.to_record() for s in scanned)

        should_enrich = self.auto_enrich if enrich is None else enrich
        if should_enrich:
            for book in added:
                await self.enrich(book)
        return added

    async def ingest_link(self, url: str) -> Book:
        """
        Archive the book behind a vendor link.

        Raises:
            UnrecognizedLinkError: Link does not map to a known vendor
        """
        ref = normalize_url(url)
        record = await self.client.fetch_by_external_id(ref.vendor, ref.external_id)

        data = record.to_record()
        data["source_urls"] = [url]
        (book,) = self.repository.add_books([data])
        logger.info(f"Ingested '{book.title}' from {ref.vendor.value}:{ref.external_id}")
        return book

    async def enrich(self, book: Book) -> bool:
        """
        Enrich one book in place and persist it.

        Remote failures are logged and leave the book as it was.

        Returns:
            True if the book was updated
        """
        try:
            enrichment = await self.client.enrich_book(book.title, book.author)
        except ExternalServiceError as e:
            logger.warning(f"Enrichment failed for '{book.title}': {e.detail or e.message}")
            return False

        merge_enrichment(book, enrichment)
        self.repository.update_book(book)
        return True
