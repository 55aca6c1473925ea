"""Spotify Web API access."""

from discogs_playlist.spotify.client import SpotifyClient
from discogs_playlist.spotify.credentials import get_access_token
from discogs_playlist.spotify.models import (
    PlaylistTarget,
    SearchCandidate,
    SearchFailure,
    SearchKind,
    SpotifyUser,
)

__all__ = [
    "PlaylistTarget",
    "SearchCandidate",
    "SearchFailure",
    "SearchKind",
    "SpotifyClient",
    "SpotifyUser",
    "get_access_token",
]
