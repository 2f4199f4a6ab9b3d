"""
Lexicon Filter

Tri-state tag query over the archive:
- include: every included trope must be present
- exclude: no excluded trope may be present
- neutral: represented by the tag's absence from the map

With no active constraint and no text query the result is empty; the
filter never stands in for "show everything".
"""

from enum import Enum
from typing import Iterable, Mapping, Optional, Sequence, Union

from loguru import logger

from shelfarchive.storage.models import Book


class TagState(str, Enum):
    """Per-tag filter state."""
    NEUTRAL = "neutral"
    INCLUDE = "include"
    EXCLUDE = "exclude"


NEXT_STATE = {
    TagState.NEUTRAL: TagState.INCLUDE,
    TagState.INCLUDE: TagState.EXCLUDE,
    TagState.EXCLUDE: TagState.NEUTRAL,
}

TagMap = Mapping[str, Union[TagState, str]]


def _known_state(value: Union[TagState, str, None]) -> Optional[TagState]:
    try:
        return TagState(value)
    except ValueError:
        return None


def _active_states(tag_map: Optional[TagMap]) -> dict[str, TagState]:
    active = {}
    for tag, value in (tag_map or {}).items():
        state = _known_state(value)
        if state is not None and state is not TagState.NEUTRAL:
            active[tag] = state
    return active


def cycle_tag_state(state: Union[TagState, str, None]) -> TagState:
    """Successor in the neutral -> include -> exclude -> neutral cycle."""
    current = _known_state(state) or TagState.NEUTRAL
    return NEXT_STATE[current]


def toggle_tag(tag_map: TagMap, tag: str) -> dict[str, TagState]:
    """
    Advance one tag's state.

    Returns a new map; the input is left untouched. A tag cycling back to
    neutral is removed rather than stored, as are entries with unknown states.
    """
    next_map = _active_states(tag_map)
    nxt = cycle_tag_state(next_map.get(tag))
    if nxt is TagState.NEUTRAL:
        next_map.pop(tag, None)
    else:
        next_map[tag] = nxt
    return next_map


def split_tags(tag_map: TagMap) -> tuple[list[str], list[str]]:
    """Return (included, excluded) tags in map order. Unknown states count as neutral."""
    included = [t for t, s in tag_map.items() if _known_state(s) is TagState.INCLUDE]
    excluded = [t for t, s in tag_map.items() if _known_state(s) is TagState.EXCLUDE]
    return included, excluded


def filter_books(
    books: Iterable[Book],
    tag_map: TagMap,
    text_query: Optional[str] = None,
) -> list[Book]:
    """
    Books satisfying every tag constraint and the optional text query.

    Args:
        books: Candidate books
        tag_map: Tag to include/exclude state
        text_query: Case-insensitive substring of title or author

    Returns:
        Matching books in input order, uncapped
    """
    included, excluded = split_tags(tag_map)
    query = (text_query or "").lower()

    if not included and not excluded and not query:
        return []

    result = []
    for book in books:
        tropes = set(book.tropes or [])
        if query and query not in book.title.lower() and query not in book.author.lower():
            continue
        if not all(tag in tropes for tag in included):
            continue
        if any(tag in tropes for tag in excluded):
            continue
        result.append(book)
    return result


def limit_results(books: Sequence[Book], limit: Optional[int]) -> list[Book]:
    """Display cap layered on top of ``filter_books``."""
    if limit is None:
        return list(books)
    return list(books[:max(0, limit)])


class LexiconFilter:
    """
    Stateful wrapper holding a tag map between queries.

    Usage:
        lexicon = LexiconFilter()
        lexicon.toggle("Slow Burn")          # include
        lexicon.toggle("Gothic")
        lexicon.toggle("Gothic")             # exclude
        matches = lexicon.apply(books, "austen")
    """

    def __init__(self, tag_map: Optional[TagMap] = None):
        self.tag_map: dict[str, TagState] = _active_states(tag_map)

    def toggle(self, tag: str) -> TagState:
        """Cycle ``tag`` and return its new state."""
        self.tag_map = toggle_tag(self.tag_map, tag)
        state = self.state_of(tag)
        logger.debug(f"Lexicon tag '{tag}' -> {state.value}")
        return state

    def state_of(self, tag: str) -> TagState:
        return self.tag_map.get(tag, TagState.NEUTRAL)

    @property
    def included(self) -> list[str]:
        return split_tags(self.tag_map)[0]

    @property
    def excluded(self) -> list[str]:
        return split_tags(self.tag_map)[1]

    @property
    def is_active(self) -> bool:
        return bool(self.tag_map)

    def clear(self) -> None:
        self.tag_map = {}

    def apply(
        self,
        books: Iterable[Book],
        text_query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Book]:
        return limit_results(filter_books(books, self.tag_map, text_query), limit)
