"""Data model of a conversion run."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from discogs_playlist.collection.normalizer import CollectionRecord
from discogs_playlist.spotify.models import PlaylistTarget, SearchCandidate, SearchKind

# (percent complete 0-100, status text)
ProgressCallback = Callable[[float, str], None]


class MatchMode(enum.Enum):
    """Granularity of the import: one track per record or whole albums."""

    TRACK = "track"
    ALBUM = "album"

    @property
    def search_kind(self) -> SearchKind:
        return SearchKind.TRACK if self is MatchMode.TRACK else SearchKind.ALBUM


class MatchTier(enum.Enum):
    """Which search attempt produced a match."""

    EXACT = "exact"
    BROAD = "broad"


class UnmatchedReason(enum.Enum):
    """Why a record produced no tracks."""

    MISSING_FIELDS = "missing artist or title"
    NO_RESULTS = "no results"
    NO_ARTIST_MATCH = "no result with a matching artist"
    SEARCH_FAILED = "search failed"
    LOOKUP_FAILED = "track lookup failed"
    ERROR = "error"


@dataclass(frozen=True)
class Matched:
    """A record resolved to one or more catalog tracks."""

    record: CollectionRecord
    candidate: SearchCandidate
    track_uris: tuple[str, ...]
    tier: MatchTier = MatchTier.EXACT


@dataclass(frozen=True)
class Unmatched:
    """A record that produced no tracks."""

    record: CollectionRecord
    reason: UnmatchedReason = UnmatchedReason.NO_RESULTS
    detail: str = ""


MatchOutcome = Matched | Unmatched


class RunState(enum.Enum):
    """Lifecycle of a run. COMPLETED and ABORTED are terminal."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class RunContext:
    """Mutable state of one run, owned by the PipelineRunner that created it.

    Attributes:
        mode: Match mode of the run.
        total: Number of input records.
        target: Playlist being filled, set once before matching.
        outcomes: One outcome per processed record, in input order.
        track_uris: Accumulated track URIs, in outcome order.
        progress: Last reported percentage.
        state: Current lifecycle state.
    """

    mode: MatchMode
    total: int
    target: PlaylistTarget | None = None
    outcomes: list[MatchOutcome] = field(default_factory=list)
    track_uris: list[str] = field(default_factory=list)
    progress: float = 0.0
    state: RunState = RunState.IDLE

    def add_outcome(self, outcome: MatchOutcome) -> None:
        self.outcomes.append(outcome)
        if isinstance(outcome, Matched):
            self.track_uris.extend(outcome.track_uris)

    @property
    def processed(self) -> int:
        return len(self.outcomes)


@dataclass(frozen=True)
class ConversionSummary:
    """Final result of a completed run, handed to the reporter."""

    mode: MatchMode
    outcomes: tuple[MatchOutcome, ...]
    added_count: int
    playlist: PlaylistTarget | None = None

    @property
    def total_count(self) -> int:
        return len(self.outcomes)

    @property
    def matched(self) -> list[Matched]:
        return [o for o in self.outcomes if isinstance(o, Matched)]

    @property
    def unmatched(self) -> list[Unmatched]:
        return [o for o in self.outcomes if isinstance(o, Unmatched)]

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @property
    def unmatched_list(self) -> list[str]:
        """``Artist - Title`` of every unmatched record, in input order."""
        return [o.record.display_name for o in self.unmatched]

    @property
    def matched_albums(self) -> list[str]:
        """``Artist - Album`` of every matched album (album mode only)."""
        if self.mode is not MatchMode.ALBUM:
            return []
        return [f"{m.candidate.artist_display} - {m.candidate.display_title}" for m in self.matched]

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form, stable across runs with the same outcomes."""
        data: dict[str, Any] = {
            "mode": self.mode.value,
            "total_count": self.total_count,
            "matched_count": self.matched_count,
            "unmatched_count": len(self.unmatched),
            "added_count": self.added_count,
            "playlist": None,
            "matched": [
                {
                    "artist": m.record.artist,
                    "title": m.record.title,
                    "match": m.candidate.display_title,
                    "match_artists": list(m.candidate.artist_names),
                    "uri": m.candidate.uri,
                    "tier": m.tier.value,
                    "track_uris": list(m.track_uris),
                }
                for m in self.matched
            ],
            "unmatched": [
                {
                    "artist": u.record.artist,
                    "title": u.record.title,
                    "reason": u.reason.value,
                }
                for u in self.unmatched
            ],
        }
        if self.playlist is not None:
            data["playlist"] = {
                "id": self.playlist.playlist_id,
                "name": self.playlist.name,
                "url": self.playlist.url,
            }
        if self.mode is MatchMode.ALBUM:
            data["matched_albums"] = self.matched_albums
        return data
