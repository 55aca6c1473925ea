"""Configuration management for discogs-playlist."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from discogs_playlist.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)

# Spotify rejects playlist insertions with more than 100 URIs
MAX_PLAYLIST_BATCH_SIZE = 100

VALID_MATCH_MODES = ("track", "album")


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "discogs-playlist" / "config.toml"


def _default_artist_fields() -> list[str]:
    return ["artist", "Artist"]


def _default_title_fields() -> list[str]:
    return ["title", "Title"]


@dataclass
class Config:
    """Application configuration.

    Attributes:
        spotify_access_token: Bearer token for the Spotify Web API. How it
            was obtained is up to the user.
        spotify_api_base: Base URL of the Spotify Web API.
        match_mode: "track" to match each record as a single track,
            "album" to add every track of the matched album.
        artist_fields: Header aliases tried, in order, for the artist column.
        title_fields: Header aliases tried, in order, for the title column.
        track_delay: Pause in seconds after each record in track mode.
        album_delay: Pause in seconds after each record in album mode.
        artist_similarity: Extra rapidfuzz ratio (0-100) a broad-search
            artist must reach on top of the substring check. 0 disables it.
        playlist_name: Name for new playlists (None = dated default).
        playlist_description: Description for new playlists.
        playlist_public: Whether new playlists are public.
        batch_size: Track URIs per playlist insertion call.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    spotify_access_token: str | None = None
    spotify_api_base: str = "https://api.spotify.com/v1"
    match_mode: str = "track"
    artist_fields: list[str] = field(default_factory=_default_artist_fields)
    title_fields: list[str] = field(default_factory=_default_title_fields)
    track_delay: float = 0.1
    album_delay: float = 0.2
    artist_similarity: int = 0
    playlist_name: str | None = None
    playlist_description: str = "Converted from Discogs collection"
    playlist_public: bool = False
    batch_size: int = MAX_PLAYLIST_BATCH_SIZE
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        if self.match_mode not in VALID_MATCH_MODES:
            raise ConfigValidationError(
                "matching.mode", self.match_mode, f"must be one of {', '.join(VALID_MATCH_MODES)}"
            )

        if not 1 <= self.batch_size <= MAX_PLAYLIST_BATCH_SIZE:
            raise ConfigValidationError(
                "playlist.batch_size",
                self.batch_size,
                f"must be between 1 and {MAX_PLAYLIST_BATCH_SIZE}",
            )

        if not self.artist_fields:
            raise ConfigValidationError("matching.artist_fields", self.artist_fields, "is empty")
        if not self.title_fields:
            raise ConfigValidationError("matching.title_fields", self.title_fields, "is empty")

        if not 0 <= self.artist_similarity <= 100:
            warnings.append(
                f"matching.artist_similarity={self.artist_similarity} "
                f"is outside valid range 0-100"
            )

        if self.track_delay < 0 or self.album_delay < 0:
            warnings.append("Negative request delays are treated as 0")
            self.track_delay = max(self.track_delay, 0.0)
            self.album_delay = max(self.album_delay, 0.0)

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: discogs-playlist init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _require_str_list(key: str, value: object) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigValidationError(key, value, "must be a list of strings")
    return list(value)


def _require_number(key: str, value: object) -> float:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(key, value, "must be a number")
    return float(value)


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [spotify] section
    spotify = data.get("spotify", {})
    if "access_token" in spotify:
        value = spotify["access_token"]
        if value is not None and not isinstance(value, str):
            raise ConfigValidationError("spotify.access_token", value, "must be a string or null")
        config.spotify_access_token = value or None

    if "api_base" in spotify:
        value = spotify["api_base"]
        if not isinstance(value, str):
            raise ConfigValidationError("spotify.api_base", value, "must be a string")
        config.spotify_api_base = value.rstrip("/")

    # Parse [matching] section
    matching = data.get("matching", {})
    if "mode" in matching:
        value = matching["mode"]
        if not isinstance(value, str):
            raise ConfigValidationError("matching.mode", value, "must be a string")
        config.match_mode = value.lower()

    if "artist_fields" in matching:
        config.artist_fields = _require_str_list(
            "matching.artist_fields", matching["artist_fields"]
        )

    if "title_fields" in matching:
        config.title_fields = _require_str_list("matching.title_fields", matching["title_fields"])

    if "track_delay" in matching:
        config.track_delay = _require_number("matching.track_delay", matching["track_delay"])

    if "album_delay" in matching:
        config.album_delay = _require_number("matching.album_delay", matching["album_delay"])

    if "artist_similarity" in matching:
        value = matching["artist_similarity"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigValidationError("matching.artist_similarity", value, "must be an integer")
        config.artist_similarity = value

    # Parse [playlist] section
    playlist = data.get("playlist", {})
    if "name" in playlist:
        value = playlist["name"]
        if value is not None and not isinstance(value, str):
            raise ConfigValidationError("playlist.name", value, "must be a string or null")
        config.playlist_name = value or None

    if "description" in playlist:
        value = playlist["description"]
        if not isinstance(value, str):
            raise ConfigValidationError("playlist.description", value, "must be a string")
        config.playlist_description = value

    if "public" in playlist:
        value = playlist["public"]
        if not isinstance(value, bool):
            raise ConfigValidationError("playlist.public", value, "must be a boolean")
        config.playlist_public = value

    if "batch_size" in playlist:
        value = playlist["batch_size"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigValidationError("playlist.batch_size", value, "must be an integer")
        config.batch_size = value

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config
