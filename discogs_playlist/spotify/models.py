"""Typed views of Spotify Web API responses."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class SearchKind(enum.Enum):
    """Catalog object type a search is scoped to.

    The value is the ``type`` query parameter and the field qualifier
    used in exact-phrase queries.
    """

    TRACK = "track"
    ALBUM = "album"


@dataclass(frozen=True)
class SearchCandidate:
    """A single search result.

    Attributes:
        provider_id: Spotify ID of the track or album.
        artist_names: Names of all credited artists, in API order.
        display_title: Track or album name.
        uri: Spotify URI (``spotify:track:...`` or ``spotify:album:...``).
    """

    provider_id: str
    artist_names: tuple[str, ...]
    display_title: str
    uri: str

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> SearchCandidate:
        artists = item.get("artists") or []
        return cls(
            provider_id=item.get("id") or "",
            artist_names=tuple(a.get("name") or "" for a in artists if isinstance(a, dict)),
            display_title=item.get("name") or "",
            uri=item.get("uri") or "",
        )

    @property
    def artist_display(self) -> str:
        return ", ".join(self.artist_names)


@dataclass(frozen=True)
class SearchFailure:
    """A search or lookup call that did not produce results.

    Returned instead of raising so a single bad record cannot stop a run.

    Attributes:
        operation: Which call failed ("search", "lookup").
        query: Query string or album ID that was requested.
        status_code: HTTP status, or None for transport errors.
        detail: Human-readable reason.
    """

    operation: str
    query: str
    status_code: int | None
    detail: str

    def __str__(self) -> str:
        status = f"HTTP {self.status_code}" if self.status_code is not None else "no response"
        return f"{self.operation} '{self.query}' failed ({status}): {self.detail}"


@dataclass(frozen=True)
class SpotifyUser:
    """The account the access token belongs to."""

    user_id: str
    display_name: str | None = None


@dataclass(frozen=True)
class PlaylistTarget:
    """The playlist a run writes into."""

    playlist_id: str
    name: str = ""
    url: str | None = None
