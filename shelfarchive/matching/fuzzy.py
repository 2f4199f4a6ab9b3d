"""
Fuzzy String Matching

Levenshtein-based similarity used by search and catalog reconciliation:
- Edit distance (insert/delete/substitute, unit cost)
- 0-100 similarity score
- Length-proportional fuzzy containment test

All functions are pure and never raise on empty input.
"""

import math

import Levenshtein


def _normalize(text: str) -> str:
    return (text or "").strip().lower()


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative scores."""
    return int(math.floor(value + 0.5))


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance with unit insert/delete/substitute costs.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character edits turning ``a`` into ``b``
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> int:
    """
    Similarity of two strings as an integer percentage.

    An empty input scores 0. Otherwise both inputs are trimmed and
    lowercased, and identical results score 100.

    Args:
        a: First string
        b: Second string

    Returns:
        Score in [0, 100]
    """
    if not a or not b:
        return 0

    a = _normalize(a)
    b = _normalize(b)
    if a == b:
        return 100

    distance = edit_distance(a, b)
    longest = max(len(a), len(b))
    return round_half_up((1 - distance / longest) * 100)


def fuzzy_threshold(query: str) -> int:
    """Edit budget for a query: one typo per four characters, at least one."""
    return max(1, len(query) // 4)


def is_fuzzy_match(target: str, query: str) -> bool:
    """
    Check whether ``query`` loosely matches ``target``.

    A match is either a case-insensitive substring hit, or a whole-string
    edit distance within ``fuzzy_threshold(query)``. An empty query matches
    everything.
    """
    if not query:
        return True

    t = (target or "").lower()
    q = query.lower()
    if q in t:
        return True

    return edit_distance(t, q) <= fuzzy_threshold(q)
