"""
Shelf Reconciler

Groups a flat book collection onto its shelves:
- Foreign-key lookup by shelf id
- Empty shelves dropped
- Orphans (missing or dangling shelf id) collected onto a synthesized
  virtual shelf, appended last

The virtual shelf is rebuilt on every call and must never be persisted.
"""

from typing import Sequence

from loguru import logger

from shelfarchive.storage.models import Book, Shelf, ShelfWithBooks

UNCATEGORIZED_SHELF_ID = "uncategorized-001"
UNCATEGORIZED_TITLE = "Monograph Recovery"
UNCATEGORIZED_DESCRIPTION = "Volumes synthesized via latent thematic clustering."


def uncategorized_shelf(books: list[Book]) -> ShelfWithBooks:
    return ShelfWithBooks(
        id=UNCATEGORIZED_SHELF_ID,
        title=UNCATEGORIZED_TITLE,
        description=UNCATEGORIZED_DESCRIPTION,
        is_virtual=True,
        books=books,
    )


def reconcile_books_to_shelves(
    books: Sequence[Book],
    shelves: Sequence[Shelf],
) -> list[ShelfWithBooks]:
    """
    Assign books to shelves.

    Args:
        books: Archived books, in display order
        shelves: Declared shelves, in display order

    Returns:
        Non-empty declared shelves in their original order, followed by the
        recovery shelf when any book could not be placed
    """
    shelf_map: dict[str, ShelfWithBooks] = {
        s.id: ShelfWithBooks(
            id=s.id,
            title=s.title,
            description=s.description,
            is_virtual=s.is_virtual,
        )
        for s in shelves
    }
    orphans: list[Book] = []

    for book in books:
        target = shelf_map.get(book.shelf_id) if book.shelf_id else None
        if target is not None:
            target.books.append(book)
        else:
            orphans.append(book)

    result = [s for s in shelf_map.values() if s.books]

    if orphans or (not shelves and books):
        result.append(uncategorized_shelf(orphans))

    logger.debug(
        f"Reconciled {len(books)} books onto {len(result)} shelves "
        f"({len(orphans)} orphans)"
    )
    return result
