"""Unit tests for batched playlist writes."""

from __future__ import annotations

import pytest

from discogs_playlist.exceptions import PlaylistWriteError
from discogs_playlist.pipeline.writer import PlaylistWriter, chunked


def _uris(n: int) -> list[str]:
    return [f"spotify:track:{i}" for i in range(n)]


class TestChunked:
    def test_even_split(self):
        assert list(chunked(["a", "b", "c", "d"], 2)) == [["a", "b"], ["c", "d"]]

    def test_remainder(self):
        assert [len(c) for c in chunked(_uris(250), 100)] == [100, 100, 50]

    def test_empty(self):
        assert list(chunked([], 10)) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            list(chunked(["a"], 0))


class TestPlaylistWriter:
    def test_batches_in_order(self, fake_spotify):
        uris = _uris(250)
        added = PlaylistWriter(fake_spotify).write("pl-1", uris)

        assert added == 250
        assert [len(b) for b in fake_spotify.added] == [100, 100, 50]
        assert [u for batch in fake_spotify.added for u in batch] == uris

    def test_duplicates_kept(self, fake_spotify):
        uris = ["spotify:track:x", "spotify:track:x"]
        PlaylistWriter(fake_spotify).write("pl-1", uris)
        assert fake_spotify.added == [uris]

    def test_smaller_batch_size(self, fake_spotify):
        PlaylistWriter(fake_spotify, max_batch_size=3).write("pl-1", _uris(7))
        assert [len(b) for b in fake_spotify.added] == [3, 3, 1]

    def test_no_uris_no_calls(self, fake_spotify):
        assert PlaylistWriter(fake_spotify).write("pl-1", []) == 0
        assert fake_spotify.calls == []

    def test_progress_callback(self, fake_spotify):
        seen: list[tuple[int, int]] = []
        PlaylistWriter(fake_spotify).write(
            "pl-1", _uris(150), on_batch=lambda added, total: seen.append((added, total))
        )
        assert seen == [(100, 150), (150, 150)]

    def test_failed_batch_keeps_earlier_batches(self, fake_spotify):
        fake_spotify.fail_add_on_call = 1

        with pytest.raises(PlaylistWriteError) as exc_info:
            PlaylistWriter(fake_spotify).write("pl-1", _uris(250))

        assert exc_info.value.batch_index == 1
        assert exc_info.value.added == 100
        assert len(fake_spotify.added) == 1
        # No further batches after the failure
        assert len([c for c in fake_spotify.calls if c[0] == "add_tracks"]) == 2

    @pytest.mark.parametrize("size", [0, 101])
    def test_batch_size_bounds(self, fake_spotify, size):
        with pytest.raises(ValueError):
            PlaylistWriter(fake_spotify, max_batch_size=size)
