"""
Catalog Module

External catalog lookups for metadata reconciliation.
"""

from shelfarchive.catalog.google_books import (
    CatalogRecord,
    GoogleBooksClient,
)
from shelfarchive.catalog.metadata_reconciler import (
    MetadataReconciler,
    apply_catalog_record,
)

__all__ = [
    "CatalogRecord",
    "GoogleBooksClient",
    "MetadataReconciler",
    "apply_catalog_record",
]
