"""
Archive search helpers.

Author search uses fuzzy containment; the quick palette uses plain
substring hits with small result caps.
"""

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from shelfarchive.matching.fuzzy import is_fuzzy_match
from shelfarchive.storage.models import AuthorPulse, Book

QUICK_SEARCH_MIN_LENGTH = 2
QUICK_SEARCH_BOOK_LIMIT = 5
QUICK_SEARCH_AUTHOR_LIMIT = 3


@dataclass
class QuickSearchResult:
    books: list[Book] = field(default_factory=list)
    authors: list[AuthorPulse] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.books and not self.authors


def _author_matches(pulse: AuthorPulse, query: str) -> bool:
    if is_fuzzy_match(pulse.name, query):
        return True
    if pulse.historical_context and is_fuzzy_match(pulse.historical_context, query):
        return True
    return any(is_fuzzy_match(title, query) for title in pulse.bibliography)


def search_authors(
    pulses: Mapping[str, AuthorPulse],
    query: str,
    favorites_only: bool = False,
) -> list[AuthorPulse]:
    """
    Filter tracked authors by name, historical context or bibliography.

    Args:
        pulses: Tracked authors keyed by name
        query: Search text; blank returns every (filtered) author
        favorites_only: Restrict to authors marked favorite

    Returns:
        Matching authors in tracking order
    """
    result = list(pulses.values())
    if favorites_only:
        result = [p for p in result if p.is_favorite]

    query = (query or "").strip()
    if query:
        result = [p for p in result if _author_matches(p, query)]
    return result


def quick_search(
    books: Iterable[Book],
    pulses: Mapping[str, AuthorPulse],
    query: str,
) -> QuickSearchResult:
    """Command-palette lookup over book titles and author names."""
    if len(query or "") < QUICK_SEARCH_MIN_LENGTH:
        return QuickSearchResult()

    q = query.lower()
    matched_books = [b for b in books if q in b.title.lower()]
    matched_authors = [p for p in pulses.values() if q in p.name.lower()]
    return QuickSearchResult(
        books=matched_books[:QUICK_SEARCH_BOOK_LIMIT],
        authors=matched_authors[:QUICK_SEARCH_AUTHOR_LIMIT],
    )


def potential_authors(
    books: Iterable[Book],
    pulses: Mapping[str, AuthorPulse],
) -> list[str]:
    """Authors present in the library but not yet tracked, first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for book in books:
        name = book.author
        if name in seen or name in pulses:
            continue
        seen.add(name)
        out.append(name)
    return out
