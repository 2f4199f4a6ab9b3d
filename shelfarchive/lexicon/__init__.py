"""
Lexicon Module

Tag-driven views of the archive:
- Tri-state include/exclude filter
- Tag pool for display
- Trope frequency analytics
"""

from shelfarchive.lexicon.filter import (
    LexiconFilter,
    TagState,
    cycle_tag_state,
    toggle_tag,
    filter_books,
    limit_results,
)
from shelfarchive.lexicon.pool import (
    SUGGESTED_LEXICON,
    collect_tags,
    shuffle_pool,
)
from shelfarchive.lexicon.analytics import (
    TropeStat,
    trope_frequencies,
    trope_report_json,
)

__all__ = [
    # Filter
    "LexiconFilter",
    "TagState",
    "cycle_tag_state",
    "toggle_tag",
    "filter_books",
    "limit_results",
    # Pool
    "SUGGESTED_LEXICON",
    "collect_tags",
    "shuffle_pool",
    # Analytics
    "TropeStat",
    "trope_frequencies",
    "trope_report_json",
]
