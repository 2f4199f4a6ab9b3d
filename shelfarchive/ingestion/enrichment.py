"""
Merge enrichment results into archived books.
"""

import re
from typing import Optional

from loguru import logger

from shelfarchive.ingestion.schemas import EnrichmentResponse
from shelfarchive.storage.models import Book, BookMetadata

OPEN_LIBRARY_COVER = "https://covers.openlibrary.org/b/isbn/{isbn}-M.jpg"


def openlibrary_cover_url(isbn: Optional[str]) -> Optional[str]:
    """Open Library medium cover URL for an ISBN, or None if it has no digits."""
    digits = re.sub(r"[^0-9Xx]", "", isbn or "").upper()
    if not digits:
        return None
    return OPEN_LIBRARY_COVER.format(isbn=digits)


def merge_tropes(existing: list[str], incoming: list[str]) -> list[str]:
    """Order-preserving union."""
    merged = list(existing)
    for trope in incoming:
        if trope not in merged:
            merged.append(trope)
    return merged


def merge_enrichment(book: Book, enrichment: EnrichmentResponse) -> Book:
    """
    Fold enrichment data into ``book`` in place.

    Supplied values replace what the book had; missing values leave the
    book untouched. Tropes are unioned. When an ISBN is known but no cover
    came back, the Open Library cover for that ISBN is used.

    Returns:
        The same book, for chaining
    """
    if enrichment.isbn:
        book.isbn = enrichment.isbn
    if enrichment.synopsis:
        book.synopsis = enrichment.synopsis
    if enrichment.is_canadian is not None:
        book.is_canadian = enrichment.is_canadian
    if enrichment.publisher:
        book.metadata = BookMetadata(publisher=enrichment.publisher)

    book.tropes = merge_tropes(book.tropes or [], enrichment.tropes)

    if enrichment.cover_url:
        book.cover_url = enrichment.cover_url
    elif book.isbn and not book.cover_url:
        book.cover_url = openlibrary_cover_url(book.isbn)

    logger.debug(f"Enriched '{book.title}' ({len(book.tropes)} tropes)")
    return book
