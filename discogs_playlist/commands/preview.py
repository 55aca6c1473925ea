"""Preview the records of a collection export."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from discogs_playlist.cli import Context, pass_context
from discogs_playlist.collection import (
    display_headers,
    normalize_rows,
    parse_rows,
    read_collection_text,
)
from discogs_playlist.commands import EXIT_INPUT_ERROR, EXIT_SUCCESS
from discogs_playlist.exceptions import CollectionError
from discogs_playlist.utils.output import console, create_table, error, info


@click.command("preview")
@click.argument("csv_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--rows",
    "-r",
    type=click.IntRange(min=1),
    default=5,
    show_default=True,
    help="Number of records to show.",
)
@pass_context
def cli(ctx: Context, csv_file: Path, rows: int) -> None:
    """Show the first records of a collection export.

    Only the artist, title, label, format and catalog# columns are shown,
    followed by the total number of records.

    Examples:

        preview collection.csv

        preview collection.csv --rows 20
    """
    config = ctx.require_config()

    try:
        text = read_collection_text(csv_file)
    except CollectionError as e:
        error(str(e))
        raise SystemExit(EXIT_INPUT_ERROR)

    raw_rows = parse_rows(text)
    records = normalize_rows(raw_rows, config.artist_fields, config.title_fields)

    if not records:
        info("No data found in CSV file.")
        raise SystemExit(EXIT_SUCCESS)

    headers = display_headers(records[0].raw_fields.keys())
    shown = min(rows, len(records))

    table = create_table(title=f"[bold]CSV Preview[/bold] (showing first {shown} records)")
    for header in headers:
        table.add_column(escape(header))
    for record in records[:shown]:
        table.add_row(*(escape(record.raw_fields.get(h, "")) for h in headers))

    console.print(table)
    console.print(f"[bold]Total records:[/bold] {len(records)}")

    missing = [r for r in records if not r.is_searchable]
    if missing:
        info(f"{len(missing)} records lack an artist or title and will not be searched.")

    raise SystemExit(EXIT_SUCCESS)
