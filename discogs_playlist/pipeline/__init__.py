"""Matching and playlist assembly pipeline."""

from discogs_playlist.pipeline.matcher import MatchResolver, clean_title, select_by_artist
from discogs_playlist.pipeline.models import (
    ConversionSummary,
    Matched,
    MatchMode,
    MatchOutcome,
    MatchTier,
    RunContext,
    RunState,
    Unmatched,
    UnmatchedReason,
)
from discogs_playlist.pipeline.pacing import (
    FixedIntervalPacer,
    NoPacer,
    TokenBucketPacer,
    pacer_for_mode,
)
from discogs_playlist.pipeline.runner import PipelineRunner
from discogs_playlist.pipeline.writer import PlaylistWriter, chunked

__all__ = [
    "ConversionSummary",
    "FixedIntervalPacer",
    "MatchMode",
    "MatchOutcome",
    "MatchResolver",
    "MatchTier",
    "Matched",
    "NoPacer",
    "PipelineRunner",
    "PlaylistWriter",
    "RunContext",
    "RunState",
    "TokenBucketPacer",
    "Unmatched",
    "UnmatchedReason",
    "chunked",
    "clean_title",
    "pacer_for_mode",
    "select_by_artist",
]
