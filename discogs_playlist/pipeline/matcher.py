"""Resolve collection records to Spotify tracks.

Two strategies, picked by :class:`MatchMode`:

  Track mode:
    Exact-phrase track search; the first result is the match.

  Album mode:
    Tier A: exact-phrase album search; the first result is the match.
    Tier B: only when tier A found nothing. Free-text search on the
            punctuation-stripped title plus artist; the first result whose
            artist overlaps the record's artist is the match.
    A matched album is expanded to all of its track URIs.

Records without artist or title are never searched. Search failures count
as "no results" for the tier that hit them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from typing import Protocol

from discogs_playlist.collection.normalizer import CollectionRecord
from discogs_playlist.pipeline.models import (
    Matched,
    MatchMode,
    MatchOutcome,
    MatchTier,
    Unmatched,
    UnmatchedReason,
)
from discogs_playlist.spotify.models import SearchCandidate, SearchFailure, SearchKind
from discogs_playlist.utils.matching import any_artist_matches, strip_punctuation

logger = logging.getLogger(__name__)

_MULTI_SPACE = re.compile(r"\s+")


class CatalogClient(Protocol):
    """The catalog calls the resolver needs."""

    def search_exact(
        self, kind: SearchKind, title: str, artist: str
    ) -> list[SearchCandidate] | SearchFailure: ...

    def search_broad(
        self, kind: SearchKind, cleaned_title: str, artist: str
    ) -> list[SearchCandidate] | SearchFailure: ...

    def lookup_tracks(self, album_id: str) -> list[str] | SearchFailure: ...


def clean_title(title: str) -> str:
    """Drop every character that is neither a word character nor whitespace."""
    return _MULTI_SPACE.sub(" ", strip_punctuation(title)).strip()


def select_by_artist(
    candidates: Sequence[SearchCandidate],
    artist: str,
    min_similarity: int = 0,
) -> SearchCandidate | None:
    """Return the first candidate whose artists overlap *artist*, in result order."""
    for candidate in candidates:
        if any_artist_matches(candidate.artist_names, artist, min_similarity):
            return candidate
    return None


class MatchResolver:
    """Applies the search strategy of one match mode to single records.

    Args:
        client: Catalog client.
        mode: Track or album matching.
        artist_similarity: Extra similarity required in tier B (0 = off).
    """

    def __init__(
        self,
        client: CatalogClient,
        mode: MatchMode,
        artist_similarity: int = 0,
    ) -> None:
        self.client = client
        self.mode = mode
        self.artist_similarity = artist_similarity
        strategies: dict[MatchMode, Callable[[CollectionRecord], MatchOutcome]] = {
            MatchMode.TRACK: self._resolve_track,
            MatchMode.ALBUM: self._resolve_album,
        }
        self._strategy = strategies[mode]

    def resolve(self, record: CollectionRecord) -> MatchOutcome:
        """Return exactly one outcome for *record*."""
        if not record.is_searchable:
            logger.debug("Skipping record with missing fields: %s", record.display_name)
            return Unmatched(record, UnmatchedReason.MISSING_FIELDS)
        return self._strategy(record)

    def _resolve_track(self, record: CollectionRecord) -> MatchOutcome:
        result = self.client.search_exact(self.mode.search_kind, record.title, record.artist)
        if isinstance(result, SearchFailure):
            logger.debug("Track search failed for %s: %s", record.display_name, result)
            return Unmatched(record, UnmatchedReason.SEARCH_FAILED, str(result))
        if not result:
            return Unmatched(record, UnmatchedReason.NO_RESULTS)

        candidate = result[0]
        logger.debug("Matched %s to track %s", record.display_name, candidate.uri)
        return Matched(record, candidate, (candidate.uri,), MatchTier.EXACT)

    def _resolve_album(self, record: CollectionRecord) -> MatchOutcome:
        failures: list[SearchFailure] = []
        candidate: SearchCandidate | None = None
        tier = MatchTier.EXACT
        reason = UnmatchedReason.NO_RESULTS

        exact = self.client.search_exact(self.mode.search_kind, record.title, record.artist)
        if isinstance(exact, SearchFailure):
            failures.append(exact)
        elif exact:
            candidate = exact[0]

        if candidate is None:
            tier = MatchTier.BROAD
            broad = self.client.search_broad(
                self.mode.search_kind, clean_title(record.title), record.artist
            )
            if isinstance(broad, SearchFailure):
                failures.append(broad)
            elif broad:
                candidate = select_by_artist(broad, record.artist, self.artist_similarity)
                if candidate is None:
                    reason = UnmatchedReason.NO_ARTIST_MATCH

        if candidate is None:
            if failures and reason is UnmatchedReason.NO_RESULTS:
                detail = "; ".join(str(f) for f in failures)
                logger.debug("Album search failed for %s: %s", record.display_name, detail)
                return Unmatched(record, UnmatchedReason.SEARCH_FAILED, detail)
            return Unmatched(record, reason)

        tracks = self.client.lookup_tracks(candidate.provider_id)
        if isinstance(tracks, SearchFailure):
            logger.debug("Track lookup failed for %s: %s", record.display_name, tracks)
            return Unmatched(record, UnmatchedReason.LOOKUP_FAILED, str(tracks))

        logger.debug(
            "Matched %s to album %s (%s, %d tracks)",
            record.display_name,
            candidate.display_title,
            tier.value,
            len(tracks),
        )
        return Matched(record, candidate, tuple(tracks), tier)
