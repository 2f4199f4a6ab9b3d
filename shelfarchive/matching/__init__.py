"""
Matching Module

String similarity and record matching:
- Levenshtein similarity and fuzzy containment
- Weighted catalog-record confidence
- Author and quick-palette search
"""

from shelfarchive.matching.fuzzy import (
    edit_distance,
    similarity,
    is_fuzzy_match,
    fuzzy_threshold,
)
from shelfarchive.matching.cover_matcher import (
    CoverMatcher,
    ScoredCandidate,
)
from shelfarchive.matching.search import (
    QuickSearchResult,
    search_authors,
    quick_search,
    potential_authors,
)

__all__ = [
    # Fuzzy
    "edit_distance",
    "similarity",
    "is_fuzzy_match",
    "fuzzy_threshold",
    # Cover matching
    "CoverMatcher",
    "ScoredCandidate",
    # Search
    "QuickSearchResult",
    "search_authors",
    "quick_search",
    "potential_authors",
]
