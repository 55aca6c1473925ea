"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from discogs_playlist.exceptions import SpotifyRequestError
from discogs_playlist.spotify.models import (
    PlaylistTarget,
    SearchFailure,
    SearchKind,
    SpotifyUser,
)

if TYPE_CHECKING:
    from collections.abc import Generator


SAMPLE_CSV = """Catalog#,Artist,Title,Label,Format,Rating,Released,release_id
PCS 7027,The Beatles,Abbey Road,Apple Records,"LP, Album",5,1969,123
,"Crosby, Stills & Nash",Crosby Stills & Nash,Atlantic,"LP, Album",,1969,456

SD 19129,Chic,C'est Chic,Atlantic,"LP, Album",4,1978,789
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[spotify]
access_token = "config-token"

[matching]
mode = "album"
artist_fields = ["Artist", "Band"]
album_delay = 0.5

[playlist]
name = "Shelf"
public = true
batch_size = 50

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def sample_csv(temp_dir: Path) -> Path:
    """Write a small Discogs collection export."""
    csv_path = temp_dir / "collection.csv"
    csv_path.write_text(SAMPLE_CSV, encoding="utf-8")
    return csv_path


@dataclass
class FakeSpotify:
    """In-memory stand-in for SpotifyClient.

    Search results are keyed by ``(kind, title, artist)`` for exact searches
    and ``(kind, cleaned_title, artist)`` for broad ones. Values may be a
    candidate list, a SearchFailure, or an exception to raise.
    """

    exact: dict[tuple[str, str, str], object] = field(default_factory=dict)
    broad: dict[tuple[str, str, str], object] = field(default_factory=dict)
    albums: dict[str, object] = field(default_factory=dict)
    fail_create: bool = False
    fail_add_on_call: int | None = None
    calls: list[tuple] = field(default_factory=list)
    added: list[list[str]] = field(default_factory=list)

    @staticmethod
    def _answer(value: object) -> object:
        if isinstance(value, Exception):
            raise value
        return value

    def search_exact(self, kind: SearchKind, title: str, artist: str):
        self.calls.append(("search_exact", kind.value, title, artist))
        return self._answer(self.exact.get((kind.value, title, artist), []))

    def search_broad(self, kind: SearchKind, cleaned_title: str, artist: str):
        self.calls.append(("search_broad", kind.value, cleaned_title, artist))
        return self._answer(self.broad.get((kind.value, cleaned_title, artist), []))

    def lookup_tracks(self, album_id: str):
        self.calls.append(("lookup_tracks", album_id))
        return self._answer(
            self.albums.get(
                album_id, SearchFailure("lookup", album_id, 404, "non existing id")
            )
        )

    def fetch_current_user(self) -> SpotifyUser:
        return SpotifyUser(user_id="user-1", display_name="Test User")

    def create_playlist(self, owner_id, name, description="", public=False) -> PlaylistTarget:
        self.calls.append(("create_playlist", owner_id, name, description, public))
        if self.fail_create:
            from discogs_playlist.exceptions import PlaylistCreateError

            raise PlaylistCreateError(name, "HTTP 403")
        return PlaylistTarget(playlist_id="pl-1", name=name, url="https://open.spotify.com/x")

    def add_tracks(self, playlist_id: str, uris: list[str]) -> None:
        self.calls.append(("add_tracks", playlist_id, len(uris)))
        if self.fail_add_on_call is not None and len(self.added) == self.fail_add_on_call:
            raise SpotifyRequestError("https://api.spotify.com/v1/playlists", 500, "boom")
        self.added.append(list(uris))

    def search_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0].startswith("search")]


@pytest.fixture
def fake_spotify() -> FakeSpotify:
    return FakeSpotify()
