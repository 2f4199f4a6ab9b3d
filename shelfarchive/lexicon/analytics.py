"""
Trope Analytics

Frequency report of the most common tropes in the archive.
"""

import json
from dataclasses import dataclass, field
from typing import Iterable

from shelfarchive.storage.models import Book


@dataclass
class TropeStat:
    trope: str
    count: int
    books: list[str] = field(default_factory=list)  # distinct titles

    def to_dict(self) -> dict:
        return {"frequency": self.count, "volumes": list(self.books)}


def trope_frequencies(books: Iterable[Book], top_n: int = 5) -> list[TropeStat]:
    """
    Most frequent tropes, highest count first.

    Ties keep the order in which tropes were first seen.
    """
    stats: dict[str, TropeStat] = {}
    for book in books:
        for trope in book.tropes or []:
            stat = stats.setdefault(trope, TropeStat(trope=trope, count=0))
            stat.count += 1
            if book.title not in stat.books:
                stat.books.append(book.title)

    ranked = sorted(stats.values(), key=lambda s: s.count, reverse=True)
    return ranked[:top_n]


def trope_report_json(stats: Iterable[TropeStat]) -> str:
    """Exportable ``{trope: {frequency, volumes}}`` document."""
    return json.dumps({s.trope: s.to_dict() for s in stats}, indent=2)
