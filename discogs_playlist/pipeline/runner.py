"""Conversion pipeline: create playlist, match records, write tracks.

A run moves IDLE -> RUNNING -> COMPLETED. It ends in ABORTED when the
playlist cannot be created or a batch cannot be added; those errors are
re-raised to the caller. Everything that goes wrong while matching a
single record turns that record into an Unmatched outcome instead.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from discogs_playlist.collection.normalizer import CollectionRecord
from discogs_playlist.config import MAX_PLAYLIST_BATCH_SIZE
from discogs_playlist.exceptions import DiscogsPlaylistError, PlaylistCreateError
from discogs_playlist.pipeline.matcher import CatalogClient, MatchResolver
from discogs_playlist.pipeline.models import (
    ConversionSummary,
    MatchMode,
    MatchOutcome,
    ProgressCallback,
    RunContext,
    RunState,
    Unmatched,
    UnmatchedReason,
)
from discogs_playlist.pipeline.pacing import NoPacer, Pacer
from discogs_playlist.pipeline.writer import PlaylistWriter
from discogs_playlist.spotify.models import PlaylistTarget

logger = logging.getLogger(__name__)

# Share of the progress bar given to matching; writing gets the rest
MATCHING_WEIGHT = 90.0


class ConverterClient(CatalogClient, Protocol):
    """Catalog client that can also create and fill playlists."""

    def create_playlist(
        self, owner_id: str, name: str, description: str = "", public: bool = False
    ) -> PlaylistTarget: ...

    def add_tracks(self, playlist_id: str, uris: list[str]) -> None: ...


class PipelineRunner:
    """Runs one conversion at a time, strictly sequentially.

    Args:
        client: Spotify client (or a compatible fake).
        mode: Track or album matching.
        pacer: Called after every searched record. Defaults to no pause.
        max_batch_size: Track URIs per insertion call.
        artist_similarity: Extra artist similarity for album tier B.
        on_progress: Receives ``(percent, status_text)`` updates.
        matching_weight: Percentage of progress allotted to matching.
    """

    def __init__(
        self,
        client: ConverterClient,
        mode: MatchMode,
        *,
        pacer: Pacer | None = None,
        max_batch_size: int = MAX_PLAYLIST_BATCH_SIZE,
        artist_similarity: int = 0,
        on_progress: ProgressCallback | None = None,
        matching_weight: float = MATCHING_WEIGHT,
    ) -> None:
        self.client = client
        self.mode = mode
        self.pacer: Pacer = pacer or NoPacer()
        self.resolver = MatchResolver(client, mode, artist_similarity=artist_similarity)
        self.writer = PlaylistWriter(client, max_batch_size)
        self.on_progress = on_progress
        self.matching_weight = matching_weight
        self.context: RunContext | None = None

    def _report(self, ctx: RunContext, percent: float, status: str) -> None:
        ctx.progress = percent
        if self.on_progress is not None:
            self.on_progress(percent, status)

    def _new_context(self, records: Sequence[CollectionRecord]) -> RunContext:
        ctx = RunContext(mode=self.mode, total=len(records))
        self.context = ctx
        return ctx

    def _resolve_one(self, record: CollectionRecord) -> MatchOutcome:
        try:
            return self.resolver.resolve(record)
        except Exception as e:
            logger.warning("Matching %s failed: %s", record.display_name, e)
            return Unmatched(record, UnmatchedReason.ERROR, str(e))

    def _match_into(self, ctx: RunContext, records: Sequence[CollectionRecord]) -> None:
        total = len(records)
        for record in records:
            outcome = self._resolve_one(record)
            ctx.add_outcome(outcome)
            percent = (ctx.processed / total) * self.matching_weight if total else 0.0
            self._report(ctx, percent, f"Searching: {record.display_name}")
            if record.is_searchable:
                self.pacer.wait()

    def _summary(self, ctx: RunContext, added: int) -> ConversionSummary:
        return ConversionSummary(
            mode=self.mode,
            outcomes=tuple(ctx.outcomes),
            added_count=added,
            playlist=ctx.target,
        )

    def match_records(self, records: Sequence[CollectionRecord]) -> ConversionSummary:
        """Run only the matching phase; no playlist is created or changed."""
        ctx = self._new_context(records)
        ctx.state = RunState.RUNNING
        self._match_into(ctx, records)
        ctx.state = RunState.COMPLETED
        self._report(ctx, 100.0, "Matching complete!")
        return self._summary(ctx, 0)

    def run(
        self,
        records: Sequence[CollectionRecord],
        *,
        owner_id: str,
        name: str,
        description: str = "",
        public: bool = False,
    ) -> ConversionSummary:
        """Create a playlist, match every record, and add the matched tracks.

        Returns:
            Summary with one outcome per record, in input order.

        Raises:
            PlaylistCreateError: If the playlist cannot be created.
            PlaylistWriteError: If adding a batch of tracks fails.
        """
        ctx = self._new_context(records)
        ctx.state = RunState.RUNNING

        try:
            ctx.target = self.client.create_playlist(owner_id, name, description, public)
        except DiscogsPlaylistError as e:
            ctx.state = RunState.ABORTED
            if isinstance(e, PlaylistCreateError):
                raise
            raise PlaylistCreateError(name, str(e)) from e
        self._report(ctx, 0.0, f"Created playlist: {name}")

        self._match_into(ctx, records)

        added = 0
        if ctx.track_uris:

            def _on_batch(done: int, total: int) -> None:
                share = 100.0 - self.matching_weight
                self._report(
                    ctx, self.matching_weight + done / total * share, "Adding tracks to playlist..."
                )

            try:
                added = self.writer.write(ctx.target.playlist_id, ctx.track_uris, _on_batch)
            except Exception:
                ctx.state = RunState.ABORTED
                raise

        ctx.state = RunState.COMPLETED
        self._report(ctx, 100.0, "Conversion complete!")
        return self._summary(ctx, added)
