"""Turn parsed CSV rows into collection records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from discogs_playlist.collection.parser import DEFAULT_DELIMITER, parse_rows, read_collection_text

DEFAULT_ARTIST_FIELDS: tuple[str, ...] = ("artist", "Artist")
DEFAULT_TITLE_FIELDS: tuple[str, ...] = ("title", "Title")

# Headers worth showing in previews; matched by case-insensitive containment
DISPLAY_KEYS: tuple[str, ...] = ("artist", "title", "label", "format", "catalog#")


@dataclass(frozen=True)
class CollectionRecord:
    """One release from the collection export.

    Attributes:
        artist: Artist name, possibly empty.
        title: Release title, possibly empty.
        raw_fields: All columns of the original row, read-only.
    """

    artist: str
    title: str
    raw_fields: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_fields", MappingProxyType(dict(self.raw_fields)))

    @property
    def is_searchable(self) -> bool:
        return bool(self.artist) and bool(self.title)

    @property
    def display_name(self) -> str:
        """``Artist - Title`` with ``Unknown`` standing in for empty fields."""
        return f"{self.artist or 'Unknown'} - {self.title or 'Unknown'}"


def get_field_value(row: Mapping[str, str], aliases: Sequence[str]) -> str:
    """Return the first non-empty value whose header matches an alias.

    Aliases are tried in order and compared case-insensitively against the
    row's headers. Returns an empty string when nothing matches.
    """
    for alias in aliases:
        wanted = alias.strip().lower()
        for header, value in row.items():
            if header.strip().lower() == wanted and value:
                return value
    return ""


def normalize_rows(
    rows: Iterable[Mapping[str, str]],
    artist_fields: Sequence[str] = DEFAULT_ARTIST_FIELDS,
    title_fields: Sequence[str] = DEFAULT_TITLE_FIELDS,
) -> list[CollectionRecord]:
    """Build one record per row, keeping row order.

    A row whose fields are all empty still yields a record with empty
    artist and title; blank lines never reach this point. Missing artist or
    title columns give empty strings, never an error.
    """
    records: list[CollectionRecord] = []
    for row in rows:
        records.append(
            CollectionRecord(
                artist=get_field_value(row, artist_fields).strip(),
                title=get_field_value(row, title_fields).strip(),
                raw_fields=row,
            )
        )
    return records


def load_collection(
    path: Path,
    artist_fields: Sequence[str] = DEFAULT_ARTIST_FIELDS,
    title_fields: Sequence[str] = DEFAULT_TITLE_FIELDS,
    delimiter: str = DEFAULT_DELIMITER,
) -> list[CollectionRecord]:
    """Read, parse and normalize a collection export.

    Raises:
        CollectionError: If the file cannot be used as input.
    """
    text = read_collection_text(path)
    return normalize_rows(parse_rows(text, delimiter), artist_fields, title_fields)


def display_headers(headers: Iterable[str]) -> list[str]:
    """Return the headers relevant for previews, in their original order."""
    return [h for h in headers if any(key in h.lower() for key in DISPLAY_KEYS)]
