"""
Shelves Module

Shelf grouping with orphan recovery.
"""

from shelfarchive.shelves.reconciler import (
    reconcile_books_to_shelves,
    uncategorized_shelf,
    UNCATEGORIZED_SHELF_ID,
    UNCATEGORIZED_TITLE,
)

__all__ = [
    "reconcile_books_to_shelves",
    "uncategorized_shelf",
    "UNCATEGORIZED_SHELF_ID",
    "UNCATEGORIZED_TITLE",
]
