"""
Ingestion Module

Getting books into the archive:
- Vendor link normalization
- Boundary validation of remote responses
- Enrichment merging
- Scan and link ingestion service
"""

from shelfarchive.ingestion.url_normalizer import (
    ExternalIdNormalizer,
    ExternalReference,
    Vendor,
    normalize_url,
)
from shelfarchive.ingestion.schemas import (
    ScannedBook,
    ScanResponse,
    EnrichmentResponse,
    AuthorRecordResponse,
    Opportunity,
    OpportunityResponse,
    OpportunityType,
)
from shelfarchive.ingestion.enrichment import (
    merge_enrichment,
    openlibrary_cover_url,
)
from shelfarchive.ingestion.client import ArchivistClient
from shelfarchive.ingestion.service import ArchiveIngestor

__all__ = [
    # Links
    "ExternalIdNormalizer",
    "ExternalReference",
    "Vendor",
    "normalize_url",
    # Schemas
    "ScannedBook",
    "ScanResponse",
    "EnrichmentResponse",
    "AuthorRecordResponse",
    "Opportunity",
    "OpportunityResponse",
    "OpportunityType",
    # Enrichment
    "merge_enrichment",
    "openlibrary_cover_url",
    # Service
    "ArchivistClient",
    "ArchiveIngestor",
]
