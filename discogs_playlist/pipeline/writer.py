"""Append track URIs to a playlist in API-sized batches."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from typing import Protocol

from discogs_playlist.config import MAX_PLAYLIST_BATCH_SIZE
from discogs_playlist.exceptions import PlaylistWriteError, SpotifyError

logger = logging.getLogger(__name__)


class PlaylistClient(Protocol):
    def add_tracks(self, playlist_id: str, uris: list[str]) -> None: ...


def chunked(items: Sequence[str], size: int) -> Iterator[list[str]]:
    """Yield consecutive slices of at most *size* items."""
    if size < 1:
        raise ValueError("size must be at least 1")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


class PlaylistWriter:
    """Adds tracks in order, one insertion call per batch.

    Duplicates are kept. A failed batch stops the write; batches that
    were already added stay in the playlist.

    Args:
        client: Client with an ``add_tracks`` call.
        max_batch_size: Largest batch sent in one call (1-100).
    """

    def __init__(
        self,
        client: PlaylistClient,
        max_batch_size: int = MAX_PLAYLIST_BATCH_SIZE,
    ) -> None:
        if not 1 <= max_batch_size <= MAX_PLAYLIST_BATCH_SIZE:
            raise ValueError(f"max_batch_size must be between 1 and {MAX_PLAYLIST_BATCH_SIZE}")
        self.client = client
        self.max_batch_size = max_batch_size

    def write(
        self,
        playlist_id: str,
        uris: Sequence[str],
        on_batch: Callable[[int, int], None] | None = None,
    ) -> int:
        """Add *uris* to the playlist.

        Args:
            playlist_id: Target playlist.
            uris: Track URIs in playlist order.
            on_batch: Called as ``on_batch(added_so_far, total)`` after each batch.

        Returns:
            Number of URIs added.

        Raises:
            PlaylistWriteError: If a batch is rejected.
        """
        total = len(uris)
        added = 0
        for index, batch in enumerate(chunked(uris, self.max_batch_size)):
            try:
                self.client.add_tracks(playlist_id, batch)
            except SpotifyError as e:
                logger.warning("Batch %d of playlist %s failed: %s", index + 1, playlist_id, e)
                raise PlaylistWriteError(playlist_id, index, added, str(e)) from e
            added += len(batch)
            logger.debug("Added batch %d (%d/%d tracks)", index + 1, added, total)
            if on_batch is not None:
                on_batch(added, total)
        return added
