"""
Integration tests for the archive: ingestion, views and author sync over a
real blob store.
"""

import pytest

from shelfarchive.ingestion import (
    ArchiveIngestor,
    ArchivistClient,
    AuthorRecordResponse,
    EnrichmentResponse,
    ScannedBook,
    ScanResponse,
    Vendor,
)
from shelfarchive.lexicon import LexiconFilter, trope_frequencies
from shelfarchive.matching import potential_authors, search_authors
from shelfarchive.shelves import UNCATEGORIZED_SHELF_ID
from shelfarchive.storage import ArchiveRepository
from shelfarchive.sync import AuthorSyncQueue

pytestmark = pytest.mark.asyncio


class FakeArchivist(ArchivistClient):
    """In-process archivist answering from canned JSON payloads."""

    SCAN_PAYLOAD = """
    {"books": [
        {"title": "Carmilla", "author": "J. Sheridan Le Fanu"},
        {"title": "Fingersmith", "author": "Sarah Waters"},
        {"title": "", "author": "Unreadable Spine"}
    ]}
    """

    ENRICHMENTS = {
        "Carmilla": {"isbn": "9780486474175", "tropes": ["Gothic", "Forbidden Love"], "publisher": "Dover"},
        "Fingersmith": {"coverUrl": "https://example.com/f.jpg", "tropes": ["Historical", "Slow Burn"]},
        "Tipping the Velvet": {"tropes": ["Historical", "Found Family"]},
    }

    def __init__(self):
        self.calls = []

    async def scan_shelf(self, images):
        self.calls.append(("scan", len(images)))
        return ScanResponse.parse_payload(self.SCAN_PAYLOAD)

    async def enrich_book(self, title, author):
        self.calls.append(("enrich", title))
        return EnrichmentResponse.parse_payload(self.ENRICHMENTS.get(title, {}))

    async def fetch_by_external_id(self, vendor, external_id):
        self.calls.append(("fetch", vendor, external_id))
        return ScannedBook(title="Tipping the Velvet", author="Sarah Waters")

    async def sync_author(self, name):
        self.calls.append(("sync", name))
        if name == "J. Sheridan Le Fanu":
            raise RuntimeError("403: permission denied")
        return AuthorRecordResponse.model_validate({
            "biography": f"{name} writes historical fiction.",
            "historicalContext": "Victorian London",
            "bibliography": ["Fingersmith", "Affinity"],
        })


class TestArchiveFlow:
    """End-to-end archive operations."""

    @pytest.fixture
    def archivist(self):
        return FakeArchivist()

    @pytest.fixture
    def ingestor(self, repository, archivist):
        return ArchiveIngestor(repository, archivist)

    async def test_scan_link_and_views(self, ingestor, repository, archivist):
        await ingestor.ingest_scan(["c2hlbGY="])
        linked = await ingestor.ingest_link("https://www.amazon.com/dp/1573227889")
        await ingestor.enrich(linked)

        assert ("fetch", Vendor.AMAZON, "1573227889") in archivist.calls
        assert [b.title for b in repository.books] == ["Tipping the Velvet", "Carmilla", "Fingersmith"]

        carmilla = next(b for b in repository.books if b.title == "Carmilla")
        assert carmilla.publisher == "Dover"
        assert carmilla.cover_url == "https://covers.openlibrary.org/b/isbn/9780486474175-M.jpg"

        # Everything starts unshelved
        view = repository.shelves_view()
        assert [s.id for s in view] == [UNCATEGORIZED_SHELF_ID]
        assert len(view[0].books) == 3

        shelf = repository.add_shelf("Victoriana")
        for book in repository.books:
            if book.author == "Sarah Waters":
                repository.assign_to_shelf(book.id, shelf.id)

        view = repository.shelves_view()
        assert [s.id for s in view] == [shelf.id, UNCATEGORIZED_SHELF_ID]
        assert [b.title for b in view[-1].books] == ["Carmilla"]

        lexicon = LexiconFilter()
        lexicon.toggle("Historical")
        lexicon.toggle("Slow Burn")
        lexicon.toggle("Slow Burn")
        assert [b.title for b in lexicon.apply(repository.books)] == ["Tipping the Velvet"]

        top = trope_frequencies(repository.books, top_n=1)
        assert (top[0].trope, top[0].count) == ("Historical", 2)

    async def test_archive_survives_reload(self, ingestor, repository):
        await ingestor.ingest_scan(["c2hlbGY="])
        repository.add_shelf("Gothic")
        repository.toggle_theme()

        reloaded = ArchiveRepository(store=repository.store)

        assert [b.title for b in reloaded.books] == [b.title for b in repository.books]
        assert [s.title for s in reloaded.shelves] == ["Gothic"]
        assert reloaded.state.theme == repository.state.theme
        assert UNCATEGORIZED_SHELF_ID not in [s.id for s in reloaded.shelves]

    async def test_author_sync_batch(self, ingestor, repository, archivist):
        await ingestor.ingest_scan(["c2hlbGY="], enrich=False)
        progress = []

        names = potential_authors(repository.books, repository.author_pulses)
        report = await AuthorSyncQueue(archivist, repository, on_progress=progress.append).run(names)

        assert names == ["J. Sheridan Le Fanu", "Sarah Waters"]
        assert report.synced == ["Sarah Waters"]
        assert report.key_compromised is True
        assert [p.current for p in progress] == [1, 2]

        reloaded = ArchiveRepository(store=repository.store)
        assert list(reloaded.author_pulses) == ["Sarah Waters"]
        assert reloaded.author_pulses["Sarah Waters"].last_checked is not None
        assert search_authors(reloaded.author_pulses, "affinity")[0].name == "Sarah Waters"
        assert potential_authors(reloaded.books, reloaded.author_pulses) == ["J. Sheridan Le Fanu"]
