"""
Metadata Reconciler

Looks a local book up in the catalog and, when a candidate is confident
enough, copies its cover, publisher and ISBN onto the book.
"""

from typing import Optional

from loguru import logger

from shelfarchive.catalog.google_books import CatalogRecord, GoogleBooksClient
from shelfarchive.matching.cover_matcher import CoverMatcher, ScoredCandidate
from shelfarchive.storage.models import Book, BookMetadata


def apply_catalog_record(book: Book, record: CatalogRecord, overwrite_cover: bool = False) -> Book:
    """Copy catalog fields onto ``book`` without clobbering what it already has."""
    if record.thumbnail_url and (overwrite_cover or not book.cover_url):
        book.cover_url = record.thumbnail_url
    if record.publisher and not book.publisher:
        book.metadata = BookMetadata(publisher=record.publisher)
    if record.isbn and not book.isbn:
        book.isbn = record.isbn
    if record.description and not book.synopsis:
        book.synopsis = record.description
    return book


class MetadataReconciler:
    """
    Catalog-backed enrichment for archived books.

    Usage:
        reconciler = MetadataReconciler(GoogleBooksClient())
        match = await reconciler.reconcile(book)
    """

    def __init__(
        self,
        client: GoogleBooksClient,
        threshold: int = CoverMatcher.DEFAULT_THRESHOLD,
        max_candidates: int = 5,
    ):
        self.client = client
        self.threshold = threshold
        self.max_candidates = max_candidates

    async def find_match(self, book: Book) -> Optional[ScoredCandidate]:
        candidates = await self.client.search_book(
            book.title, book.author, max_results=self.max_candidates
        )
        if not candidates:
            logger.info(f"No catalog candidates for '{book.title}'")
            return None
        return CoverMatcher.best_candidate(book, candidates, threshold=self.threshold)

    async def reconcile(self, book: Book, overwrite_cover: bool = False) -> Optional[ScoredCandidate]:
        """
        Enrich ``book`` in place from its best catalog match.

        Returns:
            The accepted candidate, or None if nothing was confident enough
        """
        match = await self.find_match(book)
        if match is not None:
            apply_catalog_record(book, match.record, overwrite_cover=overwrite_cover)
            logger.info(f"Reconciled '{book.title}' (confidence {match.score})")
        return match
