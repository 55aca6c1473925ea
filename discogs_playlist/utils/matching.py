"""String helpers for comparing collection records with catalog results."""

from __future__ import annotations

import re
from collections.abc import Iterable

from rapidfuzz import fuzz

# ---------------------------------------------------------------------------
# Pre-compiled patterns
# ---------------------------------------------------------------------------

_MULTI_SPACE = re.compile(r"\s+")
_NON_ALNUM_SPACE = re.compile(r"[^\w\s]", re.UNICODE)


# ---------------------------------------------------------------------------
# String normalization
# ---------------------------------------------------------------------------


def normalize(s: str) -> str:
    """Lowercase, strip edges, collapse whitespace."""
    return _MULTI_SPACE.sub(" ", s.lower().strip())


def strip_punctuation(s: str) -> str:
    """Remove non-alphanumeric characters except spaces."""
    return _NON_ALNUM_SPACE.sub("", s)


# ---------------------------------------------------------------------------
# Artist comparison
# ---------------------------------------------------------------------------


def artist_contains(candidate_artist: str, target_artist: str) -> bool:
    """Case-insensitive substring test in either direction.

    "The Who" and "the who (uk)" overlap, as do "Beatles" and "The Beatles".
    Short names over-match: "The" is contained in "The Who".
    """
    a = candidate_artist.lower()
    b = target_artist.lower()
    if not a or not b:
        return False
    return b in a or a in b


def artist_similarity(candidate_artist: str, target_artist: str) -> float:
    """Token-order-insensitive similarity (0-100) of two artist names."""
    return fuzz.token_sort_ratio(normalize(candidate_artist), normalize(target_artist))


def any_artist_matches(
    candidate_artists: Iterable[str],
    target_artist: str,
    min_similarity: int = 0,
) -> bool:
    """Return True if one of *candidate_artists* matches *target_artist*.

    A name matches when it passes :func:`artist_contains` and, if
    *min_similarity* is above 0, also reaches that :func:`artist_similarity`.
    """
    for name in candidate_artists:
        if not artist_contains(name, target_artist):
            continue
        if min_similarity <= 0 or artist_similarity(name, target_artist) >= min_similarity:
            return True
    return False
