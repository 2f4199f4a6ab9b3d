"""
Pytest configuration and fixtures for Shelf Archive tests.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shelfarchive.ingestion.client import ArchivistClient
from shelfarchive.storage import (
    ArchiveRepository,
    AuthorPulse,
    Book,
    BookMetadata,
    JsonBlobStore,
    Shelf,
)


# =============================================================================
# Book Fixtures
# =============================================================================

@pytest.fixture
def sample_shelves() -> list[Shelf]:
    """Two declared shelves plus one that no book points at."""
    return [
        Shelf(id="s-gothic", title="Gothic Shelf", description="Candlelit"),
        Shelf(id="s-empty", title="Empty Shelf"),
        Shelf(id="s-romance", title="Romance Shelf"),
    ]


@pytest.fixture
def sample_books() -> list[Book]:
    """Small library covering assigned, dangling and unassigned books."""
    return [
        Book(
            id="b1",
            title="Carmilla",
            author="J. Sheridan Le Fanu",
            scanned_at="2024-01-01T00:00:00Z",
            tropes=["Gothic", "Forbidden Love"],
            shelf_id="s-gothic",
            metadata=BookMetadata(publisher="Virago"),
        ),
        Book(
            id="b2",
            title="Fingersmith",
            author="Sarah Waters",
            scanned_at="2024-01-02T00:00:00Z",
            tropes=["Historical", "Slow Burn", "Gothic"],
            shelf_id="s-romance",
        ),
        Book(
            id="b3",
            title="Tipping the Velvet",
            author="Sarah Waters",
            scanned_at="2024-01-03T00:00:00Z",
            tropes=["Historical", "Found Family"],
            shelf_id="s-missing",
        ),
        Book(
            id="b4",
            title="The Price of Salt",
            author="Patricia Highsmith",
            scanned_at="2024-01-04T00:00:00Z",
            tropes=["Slow Burn"],
        ),
        Book(
            id="b5",
            title="Oranges Are Not the Only Fruit",
            author="Jeanette Winterson",
            scanned_at="2024-01-05T00:00:00Z",
            shelf_id="s-romance",
        ),
    ]


@pytest.fixture
def sample_author_pulses() -> dict[str, AuthorPulse]:
    return {
        "Sarah Waters": AuthorPulse(
            name="Sarah Waters",
            historical_context="Victorian London",
            bibliography=["Fingersmith", "Tipping the Velvet", "The Night Watch"],
            is_favorite=True,
        ),
        "Jeanette Winterson": AuthorPulse(
            name="Jeanette Winterson",
            historical_context="Post-war Lancashire",
            bibliography=["Oranges Are Not the Only Fruit", "Written on the Body"],
        ),
        "Radclyffe Hall": AuthorPulse(
            name="Radclyffe Hall",
            bibliography=["The Well of Loneliness"],
        ),
    }


# =============================================================================
# Repository Fixtures
# =============================================================================

@pytest.fixture
def archive_path(tmp_path) -> Path:
    return tmp_path / "archive.json"


@pytest.fixture
def blob_store(archive_path) -> JsonBlobStore:
    return JsonBlobStore(archive_path)


@pytest.fixture
def id_factory():
    """Deterministic ids: id-1, id-2, ..."""
    counter = {"n": 0}

    def _next() -> str:
        counter["n"] += 1
        return f"id-{counter['n']}"

    return _next


@pytest.fixture
def repository(blob_store, id_factory) -> ArchiveRepository:
    return ArchiveRepository(
        store=blob_store,
        id_factory=id_factory,
        clock=lambda: "2024-06-01T12:00:00Z",
    )


@pytest.fixture
def populated_repository(repository, sample_books, sample_shelves, sample_author_pulses) -> ArchiveRepository:
    repository.state.books = list(sample_books)
    repository.state.shelves = list(sample_shelves)
    repository.state.author_pulses = dict(sample_author_pulses)
    repository.save()
    return repository


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_archivist() -> AsyncMock:
    """Archivist client with every remote call mocked."""
    return AsyncMock(spec=ArchivistClient)
