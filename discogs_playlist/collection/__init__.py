"""Reading Discogs collection exports."""

from discogs_playlist.collection.normalizer import (
    CollectionRecord,
    display_headers,
    get_field_value,
    load_collection,
    normalize_rows,
)
from discogs_playlist.collection.parser import parse_line, parse_rows, read_collection_text

__all__ = [
    "CollectionRecord",
    "display_headers",
    "get_field_value",
    "load_collection",
    "normalize_rows",
    "parse_line",
    "parse_rows",
    "read_collection_text",
]
