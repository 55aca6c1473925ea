"""Locate the Spotify access token for a run.

Obtaining the token (authorization-code flow with PKCE) happens outside
this tool; here it is only picked up from the first source that has one.
"""

from __future__ import annotations

import os

from discogs_playlist.config import Config
from discogs_playlist.exceptions import SpotifyAuthError

TOKEN_ENV_VAR = "SPOTIFY_ACCESS_TOKEN"


def get_access_token(config: Config, explicit: str | None = None) -> str:
    """Return the bearer token to use.

    Precedence: *explicit* (``--token``), then the ``SPOTIFY_ACCESS_TOKEN``
    environment variable, then ``[spotify] access_token`` in the config.

    Raises:
        SpotifyAuthError: If no source provides a token.
    """
    for candidate in (explicit, os.environ.get(TOKEN_ENV_VAR), config.spotify_access_token):
        if candidate and candidate.strip():
            return candidate.strip()
    raise SpotifyAuthError(
        "No Spotify access token found. Pass --token, set "
        f"{TOKEN_ENV_VAR}, or add access_token to the [spotify] config section."
    )
