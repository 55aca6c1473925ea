"""Spotify Web API client for catalog search and playlist editing.

Every call goes through one authenticated :class:`requests.Session`
carrying the bearer token. Search and lookup calls never raise: any
transport error or non-success response comes back as a
:class:`SearchFailure`. Setup and playlist calls raise, since a run
cannot continue without them.

No retries are performed here. Pacing between records is the caller's
job (see :mod:`discogs_playlist.pipeline.pacing`).
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from discogs_playlist import __version__
from discogs_playlist.exceptions import (
    PlaylistCreateError,
    SpotifyAuthError,
    SpotifyError,
    SpotifyRequestError,
)
from discogs_playlist.spotify.models import (
    PlaylistTarget,
    SearchCandidate,
    SearchFailure,
    SearchKind,
    SpotifyUser,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.spotify.com/v1"

_USER_AGENT = f"discogs-playlist/{__version__}"
_REQUEST_TIMEOUT = 30

# Result limits per query style
EXACT_TRACK_LIMIT = 1
EXACT_ALBUM_LIMIT = 5
BROAD_LIMIT = 10
ALBUM_TRACKS_LIMIT = 50

SearchResult = list[SearchCandidate] | SearchFailure
LookupResult = list[str] | SearchFailure


def build_exact_query(kind: SearchKind, title: str, artist: str) -> str:
    """Field-qualified exact-phrase query, e.g. ``album:"Blue" artist:"Joni Mitchell"``."""
    return f'{kind.value}:"{title}" artist:"{artist}"'


def build_broad_query(cleaned_title: str, artist: str) -> str:
    """Unqualified free-text query."""
    return f"{cleaned_title} {artist}".strip()


class SpotifyClient:
    """HTTP client for the Spotify Web API.

    Args:
        access_token: OAuth bearer token.
        api_base: API root URL, without trailing slash.
        session: Optional pre-configured session (used by tests).
    """

    def __init__(
        self,
        access_token: str,
        api_base: str = DEFAULT_API_BASE,
        session: requests.Session | None = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "User-Agent": _USER_AGENT,
            }
        )

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.api_base}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """Make a single authenticated HTTP request.

        Args:
            method: HTTP method ("GET" or "POST").
            path: API path relative to ``api_base``, or an absolute URL.
            **kwargs: Additional arguments passed to requests.

        Returns:
            The HTTP response (status 2xx).

        Raises:
            SpotifyAuthError: If the token is rejected (401).
            SpotifyRequestError: On transport errors or other non-2xx status.
        """
        url = self._url(path)
        kwargs.setdefault("timeout", _REQUEST_TIMEOUT)

        try:
            resp = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise SpotifyRequestError(url, None, str(e)) from e

        if resp.status_code == 401:
            raise SpotifyAuthError(
                "Spotify rejected the access token. It may have expired; "
                "obtain a new one and pass it with --token."
            )

        if not 200 <= resp.status_code < 300:
            raise SpotifyRequestError(url, resp.status_code, _error_message(resp))

        return resp

    def _get_json(self, path: str, **kwargs: Any) -> dict[str, Any]:
        resp = self._request("GET", path, **kwargs)
        try:
            data = resp.json()
        except ValueError as e:
            raise SpotifyRequestError(self._url(path), resp.status_code, "invalid JSON") from e
        return data if isinstance(data, dict) else {}

    # ------------------------------------------------------------------
    # Catalog search (never raises)
    # ------------------------------------------------------------------

    def _search(self, kind: SearchKind, query: str, limit: int) -> SearchResult:
        try:
            data = self._get_json(
                "search", params={"q": query, "type": kind.value, "limit": limit}
            )
        except SpotifyError as e:
            logger.debug("Search failed for %r: %s", query, e)
            return SearchFailure(
                operation="search",
                query=query,
                status_code=getattr(e, "status_code", None),
                detail=str(e),
            )

        items = (data.get(f"{kind.value}s") or {}).get("items") or []
        return [SearchCandidate.from_api(item) for item in items if isinstance(item, dict)][
            :limit
        ]

    def search_exact(self, kind: SearchKind, title: str, artist: str) -> SearchResult:
        """Search with title and artist both exact-phrase qualified.

        Returns:
            Up to 1 (track) or 5 (album) candidates in relevance order,
            or a SearchFailure.
        """
        limit = EXACT_TRACK_LIMIT if kind is SearchKind.TRACK else EXACT_ALBUM_LIMIT
        return self._search(kind, build_exact_query(kind, title, artist), limit)

    def search_broad(self, kind: SearchKind, cleaned_title: str, artist: str) -> SearchResult:
        """Free-text search on title and artist.

        Returns:
            Up to 10 candidates in relevance order, or a SearchFailure.
        """
        return self._search(kind, build_broad_query(cleaned_title, artist), BROAD_LIMIT)

    def lookup_tracks(self, album_id: str) -> LookupResult:
        """Return the track URIs of an album, first page only.

        Albums longer than 50 tracks are truncated.
        """
        try:
            data = self._get_json(
                f"albums/{album_id}/tracks", params={"limit": ALBUM_TRACKS_LIMIT}
            )
        except SpotifyError as e:
            logger.debug("Track lookup failed for album %s: %s", album_id, e)
            return SearchFailure(
                operation="lookup",
                query=album_id,
                status_code=getattr(e, "status_code", None),
                detail=str(e),
            )

        items = data.get("items") or []
        return [item["uri"] for item in items if isinstance(item, dict) and item.get("uri")]

    # ------------------------------------------------------------------
    # Account and playlist calls (raise on failure)
    # ------------------------------------------------------------------

    def fetch_current_user(self) -> SpotifyUser:
        """Return the user the token belongs to.

        Raises:
            SpotifyAuthError: If the profile cannot be fetched.
        """
        try:
            data = self._get_json("me")
        except SpotifyAuthError:
            raise
        except SpotifyError as e:
            raise SpotifyAuthError(f"Failed to get user info: {e}") from e

        user_id = data.get("id")
        if not user_id:
            raise SpotifyAuthError("Failed to get user info: response has no user id")
        return SpotifyUser(user_id=user_id, display_name=data.get("display_name"))

    def create_playlist(
        self,
        owner_id: str,
        name: str,
        description: str = "",
        public: bool = False,
    ) -> PlaylistTarget:
        """Create an empty playlist owned by *owner_id*.

        Raises:
            PlaylistCreateError: If Spotify does not create the playlist.
        """
        try:
            resp = self._request(
                "POST",
                f"users/{owner_id}/playlists",
                json={"name": name, "description": description, "public": public},
            )
            data = resp.json()
        except (SpotifyError, ValueError) as e:
            raise PlaylistCreateError(name, str(e)) from e

        playlist_id = data.get("id") if isinstance(data, dict) else None
        if not playlist_id:
            raise PlaylistCreateError(name, "response has no playlist id")

        url = (data.get("external_urls") or {}).get("spotify")
        logger.info("Created playlist %s (%s)", name, playlist_id)
        return PlaylistTarget(playlist_id=playlist_id, name=name, url=url)

    def add_tracks(self, playlist_id: str, uris: list[str]) -> None:
        """Append *uris* to the end of a playlist.

        Raises:
            SpotifyError: If the insertion fails.
        """
        self._request("POST", f"playlists/{playlist_id}/tracks", json={"uris": uris})


def _error_message(resp: requests.Response) -> str:
    """Extract the ``error.message`` field of a Spotify error body."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200] or resp.reason or "unknown error"
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict):
        return str(err.get("message") or err.get("status") or "unknown error")
    if isinstance(err, str):
        return data.get("error_description") or err
    return resp.reason or "unknown error"
