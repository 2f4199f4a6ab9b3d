"""
Unit tests for catalog match scoring.
"""

import pytest

from shelfarchive.catalog.google_books import CatalogRecord
from shelfarchive.matching.cover_matcher import CoverMatcher
from shelfarchive.storage.models import Book, BookMetadata


class TestCalculateMatchScore:
    """Test weighted confidence scores."""

    @pytest.fixture
    def carmilla(self):
        return Book(
            id="b1",
            title="Carmilla",
            author="J. Sheridan Le Fanu",
            metadata=BookMetadata(publisher="Virago"),
        )

    def test_exact_match_scores_100(self, carmilla):
        remote = {"title": "Carmilla", "authors": ["J. Sheridan Le Fanu"], "publisher": "Virago"}
        assert CoverMatcher.calculate_match_score(carmilla, remote) == 100

    def test_publisher_mismatch_loses_its_weight(self, carmilla):
        remote = {"title": "Carmilla", "authors": ["J. Sheridan Le Fanu"], "publisher": "Tor"}
        assert CoverMatcher.calculate_match_score(carmilla, remote) == 70

    def test_publisher_missing_locally(self):
        local = Book(id="b1", title="Carmilla", author="Le Fanu")
        remote = {"title": "Carmilla", "authors": ["Le Fanu"], "publisher": "Tor"}
        assert CoverMatcher.calculate_match_score(local, remote) == 70

    def test_publisher_missing_on_both_sides_agrees(self):
        local = Book(id="b1", title="Carmilla", author="Le Fanu")
        remote = {"title": "Carmilla", "authors": ["Someone Else Entirely"]}
        score = CoverMatcher.calculate_match_score(local, remote)
        assert score >= 70

    def test_weighted_partial_score(self):
        local = Book(id="b1", title="kitten", author="Ann")
        remote = {"title": "sitting", "authors": ["Ann"]}
        # 57 * 0.4 + 100 * 0.3 + 100 * 0.3 = 82.8
        assert CoverMatcher.calculate_match_score(local, remote) == 83

    def test_unrelated_record(self, carmilla):
        remote = {"title": "Zzzzzzzzzz", "authors": ["Qqqqq"], "publisher": "Tor"}
        assert CoverMatcher.calculate_match_score(carmilla, remote) == 0

    def test_single_author_key_fallback(self, carmilla):
        remote = {"title": "Carmilla", "author": "J. Sheridan Le Fanu", "publisher": "Virago"}
        assert CoverMatcher.calculate_match_score(carmilla, remote) == 100

    def test_empty_authors_list_falls_back(self, carmilla):
        remote = {"title": "Carmilla", "authors": [], "author": "J. Sheridan Le Fanu", "publisher": "Virago"}
        assert CoverMatcher.calculate_match_score(carmilla, remote) == 100

    def test_catalog_record(self, carmilla):
        record = CatalogRecord(title="Carmilla", authors=["J. Sheridan Le Fanu"], publisher="Virago")
        assert CoverMatcher.calculate_match_score(carmilla, record) == 100

    def test_missing_remote_title(self, carmilla):
        remote = {"authors": ["J. Sheridan Le Fanu"], "publisher": "Virago"}
        assert CoverMatcher.calculate_match_score(carmilla, remote) == 60


class TestBestCandidate:
    """Test candidate selection."""

    @pytest.fixture
    def local(self):
        return Book(id="b1", title="Fingersmith", author="Sarah Waters")

    @pytest.fixture
    def candidates(self):
        return [
            {"title": "Affinity", "authors": ["Sarah Waters"], "publisher": "Virago"},
            {"title": "Fingersmith", "authors": ["Sarah Waters"]},
        ]

    def test_picks_highest(self, local, candidates):
        best = CoverMatcher.best_candidate(local, candidates)
        assert best is not None
        assert best.record["title"] == "Fingersmith"
        assert best.score == 100

    def test_rejects_below_threshold(self, local):
        weak = [{"title": "Nightwood", "authors": ["Djuna Barnes"], "publisher": "Faber"}]
        assert CoverMatcher.best_candidate(local, weak) is None

    def test_threshold_is_inclusive(self, local):
        remote = [{"title": "Fingersmith", "authors": ["Sarah Waters"], "publisher": "Virago"}]
        best = CoverMatcher.best_candidate(local, remote, threshold=70)
        assert best is not None
        assert best.score == 70

    def test_no_candidates(self, local):
        assert CoverMatcher.best_candidate(local, []) is None

    def test_rank_orders_descending_and_keeps_ties(self, local):
        first = {"title": "Fingersmith", "authors": ["Sarah Waters"], "id": 1}
        second = {"title": "Fingersmith", "authors": ["Sarah Waters"], "id": 2}
        weak = {"title": "Nightwood", "authors": ["Djuna Barnes"], "publisher": "Faber"}

        ranked = CoverMatcher.rank(local, [weak, first, second])

        assert [r.record.get("id") for r in ranked] == [1, 2, None]
        assert ranked[0].score >= ranked[-1].score
