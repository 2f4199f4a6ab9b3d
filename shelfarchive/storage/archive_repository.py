"""
Archive Repository for Shelf Archive

Owns the authoritative in-memory archive and its persistence:
- Book ingestion with fresh ids and timestamps
- Book, shelf and author updates
- Theme and settings changes
- Derived shelf and lexicon views over the current snapshot

Design Decisions:
1. Single blob: every mutation rewrites the whole archive (last write wins)
2. Advisory references: shelf ids on books are never validated
3. Views are computed, never stored
"""

import secrets
import string
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Optional

from loguru import logger

from shelfarchive.config import Settings
from shelfarchive.exceptions import NotFoundError
from shelfarchive.storage.blob_store import JsonBlobStore
from shelfarchive.storage.models import (
    ArchiveState,
    AuthorPulse,
    Book,
    BookMetadata,
    Shelf,
    ShelfWithBooks,
    Theme,
)

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9

_BOOK_FIELDS = {f.name for f in fields(Book)}
_PULSE_FIELDS = {f.name for f in fields(AuthorPulse)} - {"name"}
_THEME_ORDER = list(Theme)


def random_id(length: int = ID_LENGTH) -> str:
    """Short base-36 identifier."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ArchiveRepository:
    """
    Repository for archive CRUD operations.

    Usage:
        repo = ArchiveRepository(JsonBlobStore("./data/archive.json"))
        added = repo.add_books([{"title": "Carmilla", "author": "J. Sheridan Le Fanu"}])
        shelves = repo.shelves_view()
    """

    def __init__(
        self,
        store: Optional[JsonBlobStore] = None,
        state: Optional[ArchiveState] = None,
        id_factory: Callable[[], str] = random_id,
        clock: Callable[[], str] = utc_now_iso,
    ):
        """
        Initialize repository.

        Args:
            store: Blob store to load from and persist to (None = memory only)
            state: Initial state; loaded from ``store`` when omitted
            id_factory: Generates new book and shelf ids
            clock: Returns the current timestamp as an ISO string
        """
        self.store = store
        self.id_factory = id_factory
        self.clock = clock

        if state is not None:
            self.state = state
        elif store is not None:
            self.state = store.load()
        else:
            self.state = ArchiveState()

        logger.info(
            f"ArchiveRepository initialized: {len(self.state.books)} books, "
            f"{len(self.state.author_pulses)} authors"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArchiveRepository":
        store = JsonBlobStore(settings.archive_path, storage_key=settings.storage_key)
        return cls(store=store)

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(self) -> None:
        """Persist the whole archive, if a store is attached."""
        if self.store is not None:
            self.store.save(self.state)

    # =========================================================================
    # Books
    # =========================================================================

    @property
    def books(self) -> list[Book]:
        return self.state.books

    def _new_book_id(self, taken: set[str]) -> str:
        new_id = self.id_factory()
        while new_id in taken:
            new_id = self.id_factory()
        return new_id

    def _build_book(self, record: Mapping[str, Any], taken: set[str]) -> Book:
        data = {k: v for k, v in record.items() if k in _BOOK_FIELDS}
        if isinstance(data.get("metadata"), Mapping):
            data["metadata"] = BookMetadata(**data["metadata"])
        if not data.get("id"):
            data["id"] = self._new_book_id(taken)
        taken.add(data["id"])
        data.setdefault("title", "")
        data.setdefault("author", "")
        data["scanned_at"] = self.clock()
        return Book(**data)

    def add_books(self, records: Iterable[Mapping[str, Any]]) -> list[Book]:
        """
        Ingest new books.

        Each record gets a fresh id (unless it supplies one) and a fresh
        ``scanned_at``. New books go before existing ones.

        Args:
            records: Book field mappings (snake_case keys)

        Returns:
            The created books, in input order
        """
        taken = {b.id for b in self.state.books}
        new_books = [self._build_book(r, taken) for r in records]
        if not new_books:
            return []

        self.state.books = new_books + self.state.books
        self.save()
        logger.info(f"Added {len(new_books)} books to archive")
        return new_books

    def get_book(self, book_id: str) -> Book:
        for book in self.state.books:
            if book.id == book_id:
                return book
        raise NotFoundError("Book", book_id)

    def update_book(self, book: Book) -> Book:
        """Replace the stored book with the same id."""
        for i, existing in enumerate(self.state.books):
            if existing.id == book.id:
                self.state.books[i] = book
                self.save()
                return book
        raise NotFoundError("Book", book.id)

    def remove_book(self, book_id: str) -> Book:
        book = self.get_book(book_id)
        self.state.books = [b for b in self.state.books if b.id != book_id]
        self.save()
        logger.info(f"Removed book {book_id}")
        return book

    # =========================================================================
    # Shelves
    # =========================================================================

    @property
    def shelves(self) -> list[Shelf]:
        return self.state.shelves

    def add_shelf(self, title: str, description: Optional[str] = None) -> Shelf:
        shelf = Shelf(id=f"shelf-{self.id_factory()}", title=title, description=description)
        self.state.shelves.append(shelf)
        self.save()
        logger.info(f"Created shelf '{title}' ({shelf.id})")
        return shelf

    def remove_shelf(self, shelf_id: str) -> Shelf:
        """
        Delete a shelf. Books that referenced it keep the dangling id and
        surface on the recovery shelf.
        """
        for shelf in self.state.shelves:
            if shelf.id == shelf_id:
                self.state.shelves = [s for s in self.state.shelves if s.id != shelf_id]
                self.save()
                return shelf
        raise NotFoundError("Shelf", shelf_id)

    def assign_to_shelf(self, book_id: str, shelf_id: Optional[str]) -> Book:
        """Point a book at a shelf (or None to unassign)."""
        book = self.get_book(book_id)
        book.shelf_id = shelf_id
        self.save()
        return book

    # =========================================================================
    # Authors
    # =========================================================================

    @property
    def author_pulses(self) -> dict[str, AuthorPulse]:
        return self.state.author_pulses

    def update_author(self, name: str, **data: Any) -> AuthorPulse:
        """
        Merge fields into an author record, creating a blank one if needed.

        Unknown field names are ignored.
        """
        current = self.state.author_pulses.get(name) or AuthorPulse(name=name)
        updates = {k: v for k, v in data.items() if k in _PULSE_FIELDS}
        pulse = replace(current, **updates)
        self.state.author_pulses[name] = pulse
        self.save()
        return pulse

    def add_author(self, name: str) -> AuthorPulse:
        if name in self.state.author_pulses:
            return self.state.author_pulses[name]
        return self.update_author(name)

    # =========================================================================
    # Preferences
    # =========================================================================

    def toggle_theme(self) -> Theme:
        """Advance light -> dark -> sepia -> light."""
        idx = _THEME_ORDER.index(self.state.theme)
        self.state.theme = _THEME_ORDER[(idx + 1) % len(_THEME_ORDER)]
        self.save()
        return self.state.theme

    def update_settings(self, **values: bool) -> None:
        self.state.settings = replace(self.state.settings, **values)
        self.save()

    # =========================================================================
    # Views
    # =========================================================================

    def shelves_view(self) -> list[ShelfWithBooks]:
        from shelfarchive.shelves.reconciler import reconcile_books_to_shelves

        return reconcile_books_to_shelves(self.state.books, self.state.shelves)

    def lexicon_view(
        self,
        tag_map: Mapping[str, Any],
        text_query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Book]:
        from shelfarchive.lexicon.filter import filter_books, limit_results

        return limit_results(filter_books(self.state.books, tag_map, text_query), limit)
