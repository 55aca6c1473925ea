"""Unit tests for access token lookup."""

from __future__ import annotations

import pytest

from discogs_playlist.config import Config
from discogs_playlist.exceptions import SpotifyAuthError
from discogs_playlist.spotify.credentials import TOKEN_ENV_VAR, get_access_token


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv(TOKEN_ENV_VAR, raising=False)


def test_explicit_wins(monkeypatch):
    monkeypatch.setenv(TOKEN_ENV_VAR, "env-token")
    config = Config(spotify_access_token="config-token")
    assert get_access_token(config, "cli-token") == "cli-token"


def test_env_before_config(monkeypatch):
    monkeypatch.setenv(TOKEN_ENV_VAR, "env-token")
    config = Config(spotify_access_token="config-token")
    assert get_access_token(config) == "env-token"


def test_config_fallback():
    assert get_access_token(Config(spotify_access_token=" config-token\n")) == "config-token"


def test_blank_values_skipped(monkeypatch):
    monkeypatch.setenv(TOKEN_ENV_VAR, "   ")
    assert get_access_token(Config(spotify_access_token="config-token"), "") == "config-token"


def test_missing_token():
    with pytest.raises(SpotifyAuthError, match="No Spotify access token"):
        get_access_token(Config())
