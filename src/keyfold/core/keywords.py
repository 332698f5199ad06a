"""
Keyword set algebra.

Keywords are opaque, case-sensitive strings compared by exact equality.
A KeywordSet is an immutable frozenset of them; every operation here returns
a new set and never mutates its inputs.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

KeywordSet = FrozenSet[str]

EMPTY: KeywordSet = frozenset()


def keyword_set(keywords: Optional[Iterable[str]] = None) -> KeywordSet:
    """Build a KeywordSet from any iterable of keywords."""
    if keywords is None:
        return EMPTY
    return frozenset(keywords)


def union(a: Iterable[str], b: Iterable[str]) -> KeywordSet:
    """Keywords present in either set."""
    return frozenset(a) | frozenset(b)


def intersection(a: Iterable[str], b: Iterable[str]) -> KeywordSet:
    """Keywords present in both sets."""
    return frozenset(a) & frozenset(b)


def difference(a: Iterable[str], b: Iterable[str]) -> KeywordSet:
    """Keywords of ``a`` that are not in ``b``."""
    return frozenset(a) - frozenset(b)


def parse_keywords(text: Optional[str]) -> KeywordSet:
    """
    Split a whitespace-separated keyword string.

    Anything that is not whitespace is kept verbatim, so stray punctuation
    simply becomes part of a token.
    """
    if not text:
        return EMPTY
    return frozenset(text.split())


def format_keywords(keywords: Iterable[str]) -> str:
    """Render keywords as a sorted, space-separated string."""
    return " ".join(sorted(keywords))
