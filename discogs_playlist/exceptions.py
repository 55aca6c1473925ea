"""Exception hierarchy for discogs-playlist."""

from pathlib import Path


class DiscogsPlaylistError(Exception):
    """Base exception for all discogs-playlist errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all discogs-playlist errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(DiscogsPlaylistError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Input Errors
class CollectionError(DiscogsPlaylistError):
    """Collection export cannot be used as input."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read collection {path}: {reason}")


# Spotify Errors
class SpotifyError(DiscogsPlaylistError):
    """Spotify Web API errors."""

    pass


class SpotifyAuthError(SpotifyError):
    """Access token missing, expired or rejected."""

    pass


class SpotifyRequestError(SpotifyError):
    """A Spotify API call failed.

    Attributes:
        url: Request URL.
        status_code: HTTP status, or None for transport failures.
    """

    def __init__(self, url: str, status_code: int | None, detail: str) -> None:
        self.url = url
        self.status_code = status_code
        self.detail = detail
        status = f"HTTP {status_code}" if status_code is not None else "transport error"
        super().__init__(f"Request to {url} failed ({status}): {detail}")


# Playlist Errors
class PlaylistError(DiscogsPlaylistError):
    """Playlist creation or update errors."""

    pass


class PlaylistCreateError(PlaylistError):
    """The target playlist could not be created."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to create playlist '{name}': {reason}")


class PlaylistWriteError(PlaylistError):
    """A batch of tracks could not be added to the playlist."""

    def __init__(self, playlist_id: str, batch_index: int, added: int, reason: str) -> None:
        self.playlist_id = playlist_id
        self.batch_index = batch_index
        self.added = added
        self.reason = reason
        super().__init__(
            f"Failed to add tracks to playlist {playlist_id} "
            f"(batch {batch_index + 1}, {added} tracks already added): {reason}"
        )
