"""
Cover Matcher

Confidence that a remote catalog record describes a local book:
- Title similarity (weight 0.4)
- Author similarity (weight 0.3)
- Exact publisher agreement (weight 0.3)

The weighted sum is rounded and capped at 100. Remote records may be
catalog dataclasses or raw JSON mappings.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from loguru import logger

from shelfarchive.matching.fuzzy import round_half_up, similarity
from shelfarchive.storage.models import Book


def _remote_field(remote: Any, name: str) -> Any:
    if isinstance(remote, Mapping):
        return remote.get(name)
    return getattr(remote, name, None)


def _remote_author(remote: Any) -> str:
    authors = _remote_field(remote, "authors")
    if authors:
        return authors[0] or ""
    return _remote_field(remote, "author") or ""


@dataclass
class ScoredCandidate:
    """Remote record with its match confidence."""

    record: Any
    score: int


class CoverMatcher:
    """
    Weighted Levenshtein confidence scorer.

    Usage:
        score = CoverMatcher.calculate_match_score(book, {"title": ..., "authors": [...]})
        best = CoverMatcher.best_candidate(book, records, threshold=70)
    """

    TITLE_WEIGHT = 0.4
    AUTHOR_WEIGHT = 0.3
    PUBLISHER_WEIGHT = 0.3

    DEFAULT_THRESHOLD = 70

    @classmethod
    def calculate_match_score(cls, local: Book, remote: Any) -> int:
        """
        Score a remote record against a local book.

        Args:
            local: Archived book
            remote: Catalog record (dataclass or mapping)

        Returns:
            Confidence in [0, 100]
        """
        title_score = similarity(local.title or "", _remote_field(remote, "title") or "")
        author_score = similarity(local.author or "", _remote_author(remote))
        # Missing on both sides counts as agreement.
        publisher_score = 100 if local.publisher == _remote_field(remote, "publisher") else 0

        total = (
            title_score * cls.TITLE_WEIGHT
            + author_score * cls.AUTHOR_WEIGHT
            + publisher_score * cls.PUBLISHER_WEIGHT
        )
        return min(100, round_half_up(total))

    @classmethod
    def rank(cls, local: Book, candidates: Iterable[Any]) -> list[ScoredCandidate]:
        """Score every candidate, best first. Ties keep input order."""
        scored = [
            ScoredCandidate(record=c, score=cls.calculate_match_score(local, c))
            for c in candidates
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored

    @classmethod
    def best_candidate(
        cls,
        local: Book,
        candidates: Iterable[Any],
        threshold: int = DEFAULT_THRESHOLD,
    ) -> Optional[ScoredCandidate]:
        """
        Pick the highest scoring candidate at or above ``threshold``.

        Returns:
            ScoredCandidate or None when nothing is confident enough
        """
        ranked = cls.rank(local, candidates)
        if not ranked:
            return None

        best = ranked[0]
        if best.score < threshold:
            logger.warning(
                f"Rejected best match '{_remote_field(best.record, 'title')}' "
                f"for '{local.title}' - score {best.score} < {threshold}"
            )
            return None

        logger.debug(f"Matched '{local.title}' with confidence {best.score}")
        return best
