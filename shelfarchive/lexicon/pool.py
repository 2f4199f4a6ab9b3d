"""
Lexicon pool: the set of tags offered for filtering.
"""

import random
from typing import Iterable, Optional

from shelfarchive.lexicon.filter import TagMap
from shelfarchive.storage.models import Book

SUGGESTED_LEXICON = [
    "Slow Burn", "Enemies to Lovers", "Sword & Sorcery", "Historical",
    "Found Family", "Cottagecore", "Gothic", "Butch/Femme", "Academic",
    "Small Town", "Sci-Fi", "Urban Fantasy", "Trans Lead", "BIPOC Lead",
    "Fake Dating", "Second Chance", "Forbidden Love", "Sports Romance",
]

DEFAULT_POOL_SIZE = 18


def collect_tags(books: Iterable[Book]) -> list[str]:
    """Suggested tags followed by every library trope, de-duplicated."""
    seen: set[str] = set()
    out: list[str] = []
    for tag in SUGGESTED_LEXICON:
        if tag not in seen:
            seen.add(tag)
            out.append(tag)
    for book in books:
        for tag in book.tropes or []:
            if tag not in seen:
                seen.add(tag)
                out.append(tag)
    return out


def shuffle_pool(
    books: Iterable[Book],
    tag_map: Optional[TagMap] = None,
    size: int = DEFAULT_POOL_SIZE,
    rng: Optional[random.Random] = None,
) -> list[str]:
    """
    Draw a fresh pool of tags to display.

    Active tags always stay in the pool, first; the remaining slots are
    filled with a random sample of idle tags.
    """
    rng = rng or random.Random()
    active = list((tag_map or {}).keys())
    idle = [t for t in collect_tags(books) if t not in active]
    slots = max(0, min(size - len(active), len(idle)))
    return active + rng.sample(idle, slots)
