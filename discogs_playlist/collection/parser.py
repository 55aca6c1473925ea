"""Parser for Discogs collection CSV exports.

Implements the simple CSV dialect the exports use: one record per line,
a header row first, and double quotes that toggle a quoted span in which
the delimiter is literal text. Doubled quotes (``""``) are *not* treated
as an escaped quote; each quote character just flips the quoted state.
"""

from __future__ import annotations

import logging
from pathlib import Path

from discogs_playlist.exceptions import CollectionError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
QUOTE_CHAR = '"'
COLLECTION_SUFFIX = ".csv"


def parse_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> list[str]:
    """Split one line into raw field values.

    Args:
        line: A single line without its line terminator.
        delimiter: Field separator.

    Returns:
        The untrimmed field values. An empty line yields ``[""]``.
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE_CHAR:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(char)

    values.append("".join(current))
    return values


def parse_rows(text: str, delimiter: str = DEFAULT_DELIMITER) -> list[dict[str, str]]:
    """Parse delimited text into a list of header -> value mappings.

    The first line is the header row. Lines that contain only whitespace
    are skipped. Headers and values are trimmed; rows shorter than the
    header get empty strings for the missing columns.
    """
    lines = text.split("\n")
    if not lines or not lines[0].strip():
        return []

    headers = [h.strip() for h in parse_line(lines[0], delimiter)]
    rows: list[dict[str, str]] = []

    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        values = parse_line(line, delimiter)
        if len(values) > len(headers):
            logger.debug(
                "Line %d has %d fields, header has %d; extra fields ignored",
                line_no,
                len(values),
                len(headers),
            )
        row: dict[str, str] = {}
        for index, header in enumerate(headers):
            row[header] = values[index].strip() if index < len(values) else ""
        rows.append(row)

    return rows


def read_collection_text(path: Path) -> str:
    """Read a collection export from disk.

    Raises:
        CollectionError: If the file is missing, not a ``.csv`` file,
            unreadable, or has no header row.
    """
    if path.suffix.lower() != COLLECTION_SUFFIX:
        raise CollectionError(path, "please select a CSV file")
    if not path.is_file():
        raise CollectionError(path, "file not found")

    try:
        # utf-8-sig drops the byte order mark some spreadsheet tools write
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CollectionError(path, f"error reading file: {e}") from e

    if not text.strip():
        raise CollectionError(path, "file is empty")

    return text
