"""Unit tests for turning CSV rows into collection records."""

from __future__ import annotations

from pathlib import Path

import pytest

from discogs_playlist.collection import (
    CollectionRecord,
    display_headers,
    get_field_value,
    load_collection,
    normalize_rows,
    parse_rows,
)


class TestGetFieldValue:
    """Tests for get_field_value()."""

    def test_case_insensitive_header(self):
        assert get_field_value({"ARTIST": "Chic"}, ["artist"]) == "Chic"

    def test_first_alias_wins(self):
        row = {"Band": "B", "Artist": "A"}
        assert get_field_value(row, ["artist", "band"]) == "A"

    def test_empty_value_falls_through(self):
        row = {"artist": "", "Band": "B"}
        assert get_field_value(row, ["artist", "band"]) == "B"

    def test_missing_returns_empty(self):
        assert get_field_value({"Label": "Atlantic"}, ["artist"]) == ""


class TestNormalizeRows:
    """Tests for normalize_rows()."""

    def test_one_record_per_row_in_order(self):
        rows = [{"Artist": f"A{i}", "Title": f"T{i}"} for i in range(7)]
        records = normalize_rows(rows)
        assert len(records) == 7
        assert [r.title for r in records] == [f"T{i}" for i in range(7)]

    def test_missing_fields_become_empty(self):
        records = normalize_rows([{"Label": "Atlantic", "Format": "LP"}])
        assert records[0].artist == ""
        assert records[0].title == ""

    def test_all_blank_row_kept_as_unknown(self):
        records = normalize_rows(parse_rows("Artist,Title\nA,B\n,\nC,D\n"))
        assert len(records) == 3
        assert records[1].display_name == "Unknown - Unknown"
        assert not records[1].is_searchable
        assert [r.artist for r in (records[0], records[2])] == ["A", "C"]

    def test_custom_aliases(self):
        records = normalize_rows(
            [{"Band": "Can", "Album": "Tago Mago"}],
            artist_fields=["artist", "band"],
            title_fields=["album"],
        )
        assert (records[0].artist, records[0].title) == ("Can", "Tago Mago")

    def test_raw_fields_kept(self):
        row = {"Artist": "Chic", "Title": "Risqué", "Label": "Atlantic"}
        record = normalize_rows([row])[0]
        assert record.raw_fields["Label"] == "Atlantic"


class TestCollectionRecord:
    """Tests for CollectionRecord."""

    def test_frozen(self):
        record = CollectionRecord("A", "B")
        with pytest.raises(AttributeError):
            record.artist = "C"  # type: ignore[misc]

    def test_raw_fields_read_only(self):
        record = CollectionRecord("A", "B", {"Label": "X"})
        with pytest.raises(TypeError):
            record.raw_fields["Label"] = "Y"  # type: ignore[index]

    def test_raw_fields_detached_from_source(self):
        row = {"Label": "X"}
        record = CollectionRecord("A", "B", row)
        row["Label"] = "Y"
        assert record.raw_fields["Label"] == "X"

    def test_display_name_unknown(self):
        assert CollectionRecord("", "Title").display_name == "Unknown - Title"
        assert CollectionRecord("Artist", "").display_name == "Artist - Unknown"

    def test_is_searchable(self):
        assert CollectionRecord("A", "B").is_searchable
        assert not CollectionRecord("", "B").is_searchable
        assert not CollectionRecord("A", "").is_searchable


class TestLoadCollection:
    """Tests for load_collection()."""

    def test_sample_export(self, sample_csv: Path):
        records = load_collection(sample_csv)
        assert [r.artist for r in records] == ["The Beatles", "Crosby, Stills & Nash", "Chic"]
        assert records[2].title == "C'est Chic"
        assert records[0].raw_fields["Format"] == "LP, Album"


def test_display_headers():
    headers = ["Catalog#", "Artist", "Title", "Label", "Format", "Rating", "release_id"]
    assert display_headers(headers) == ["Catalog#", "Artist", "Title", "Label", "Format"]
