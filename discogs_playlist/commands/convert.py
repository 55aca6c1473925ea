"""Convert a Discogs collection export into a Spotify playlist."""

from __future__ import annotations

import json
import logging
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

import click
from rich.markup import escape

from discogs_playlist.cli import Context, pass_context
from discogs_playlist.collection import CollectionRecord, load_collection
from discogs_playlist.commands import (
    EXIT_AUTH_ERROR,
    EXIT_CONVERT_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
)
from discogs_playlist.exceptions import CollectionError, PlaylistError, SpotifyAuthError
from discogs_playlist.pipeline import (
    ConversionSummary,
    MatchMode,
    PipelineRunner,
    pacer_for_mode,
)
from discogs_playlist.pipeline.pacing import Pacer
from discogs_playlist.spotify import SpotifyClient, get_access_token
from discogs_playlist.utils.output import (
    console,
    create_progress,
    create_table,
    error,
    format_track,
    info,
    is_debug,
    success,
    verbose,
    warning,
)

logger = logging.getLogger(__name__)


def default_playlist_name(today: date | None = None) -> str:
    """``My Discogs Collection (YYYY-MM-DD)``."""
    return f"My Discogs Collection ({(today or date.today()).isoformat()})"


@click.command("convert")
@click.argument("csv_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in MatchMode], case_sensitive=False),
    default=None,
    help="Match each record as a single track or as a whole album (overrides config).",
)
@click.option("--name", "-n", default=None, help="Playlist name (default: dated name).")
@click.option("--description", "-d", default=None, help="Playlist description.")
@click.option(
    "--public/--private",
    "public",
    default=None,
    help="Playlist visibility (overrides config, default private).",
)
@click.option(
    "--token",
    default=None,
    help="Spotify access token (default: $SPOTIFY_ACCESS_TOKEN or config).",
)
@click.option(
    "--batch-size",
    type=click.IntRange(1, 100),
    default=None,
    help="Tracks per playlist insertion call (overrides config, max 100).",
)
@click.option(
    "--delay",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to pause after each record (overrides config).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the conversion summary as JSON to this file.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Search for every record but do not create a playlist.",
)
@click.option(
    "--max-width",
    "-w",
    type=int,
    default=50,
    show_default=True,
    help="Max width for artist/title columns (0 = unlimited).",
)
@pass_context
def cli(
    ctx: Context,
    csv_file: Path,
    mode: str | None,
    name: str | None,
    description: str | None,
    public: bool | None,
    token: str | None,
    batch_size: int | None,
    delay: float | None,
    output_path: Path | None,
    dry_run: bool,
    max_width: int,
) -> None:
    """Create a Spotify playlist from a Discogs collection CSV export.

    Every record is searched in the Spotify catalog, one at a time:

    \b
      track mode: exact track search, first result is added
      album mode: exact album search, then a free-text search whose
                  result must share the record's artist; all tracks of
                  the matched album are added

    Records that cannot be matched are listed at the end.

    Examples:

        convert collection.csv

        convert collection.csv --mode album --name "Vinyl shelf" --public

        convert collection.csv --dry-run --output matches.json
    """
    config = ctx.require_config()

    match_mode = MatchMode((mode or config.match_mode).lower())
    playlist_name = name or config.playlist_name or default_playlist_name()
    playlist_description = description if description is not None else config.playlist_description
    playlist_public = public if public is not None else config.playlist_public
    max_batch = batch_size or config.batch_size

    try:
        records = load_collection(csv_file, config.artist_fields, config.title_fields)
    except CollectionError as e:
        error(str(e))
        raise SystemExit(EXIT_INPUT_ERROR)

    if not records:
        error(f"No data found in {csv_file}")
        raise SystemExit(EXIT_INPUT_ERROR)

    info(f"Loaded {len(records)} records from {csv_file}")

    try:
        client = SpotifyClient(get_access_token(config, token), config.spotify_api_base)
        user = None if dry_run else client.fetch_current_user()
    except SpotifyAuthError as e:
        error(str(e), hint="Obtain a fresh token and pass it with --token")
        raise SystemExit(EXIT_AUTH_ERROR)

    if user is not None:
        info(f"Connected as {user.display_name or user.user_id}")

    if delay is not None:
        pacer = pacer_for_mode(match_mode, delay, delay)
    else:
        pacer = pacer_for_mode(match_mode, config.track_delay, config.album_delay)
    verbose(f"Mode: {match_mode.value}, batch size: {max_batch}")

    try:
        summary = _run_conversion(
            client,
            records,
            match_mode,
            pacer=pacer,
            max_batch=max_batch,
            artist_similarity=config.artist_similarity,
            owner_id=user.user_id if user is not None else None,
            name=playlist_name,
            description=playlist_description,
            public=playlist_public,
        )
    except PlaylistError as e:
        error(f"Conversion failed: {e}")
        raise SystemExit(EXIT_CONVERT_ERROR)

    _display_results(summary, max_width=max_width, dry_run=dry_run)

    if output_path is not None:
        try:
            _write_summary_json(summary, output_path)
        except OSError as e:
            warning(f"Could not write summary to {output_path}: {e}")
        else:
            info(f"Summary written to {output_path}")

    raise SystemExit(EXIT_SUCCESS)


def _run_conversion(
    client: SpotifyClient,
    records: list[CollectionRecord],
    mode: MatchMode,
    *,
    pacer: Pacer,
    max_batch: int,
    artist_similarity: int,
    owner_id: str | None,
    name: str,
    description: str,
    public: bool,
) -> ConversionSummary:
    """Run the pipeline behind a progress bar (plain log lines with --debug)."""

    def _execute(runner: PipelineRunner) -> ConversionSummary:
        if owner_id is None:
            return runner.match_records(records)
        return runner.run(
            records, owner_id=owner_id, name=name, description=description, public=public
        )

    if is_debug():

        def _log_progress(percent: float, status: str) -> None:
            logger.debug("[%3.0f%%] %s", percent, status)

        runner = PipelineRunner(
            client,
            mode,
            pacer=pacer,
            max_batch_size=max_batch,
            artist_similarity=artist_similarity,
            on_progress=_log_progress,
        )
        return _execute(runner)

    progress = create_progress()
    task_id = progress.add_task("Starting...", total=100)

    def _on_progress(percent: float, status: str) -> None:
        progress.update(task_id, completed=percent, description=escape(status))

    runner = PipelineRunner(
        client,
        mode,
        pacer=pacer,
        max_batch_size=max_batch,
        artist_similarity=artist_similarity,
        on_progress=_on_progress,
    )
    with progress:
        return _execute(runner)


def _truncate(text: str, width: int) -> str:
    """Truncate text to width, adding ellipsis if needed."""
    if width <= 0 or len(text) <= width:
        return text
    return text[: width - 1] + "…"


def _display_results(summary: ConversionSummary, *, max_width: int, dry_run: bool) -> None:
    """Print counts, matched albums (album mode) and unmatched records."""
    stats = create_table(title="[bold]Conversion Results[/bold]", show_header=True)
    stats.add_column("Tracks Found", justify="right", style="green")
    stats.add_column("Not Found", justify="right", style="red")
    stats.add_column("Total Processed", justify="right")
    track_count = sum(len(m.track_uris) for m in summary.matched)
    stats.add_row(str(track_count), str(len(summary.unmatched)), str(summary.total_count))
    console.print(stats)

    if summary.matched_albums:
        table = create_table(
            title=f"[bold dim]MATCHED ALBUMS[/bold dim] — {len(summary.matched_albums)}"
        )
        table.add_column("Record", style="magenta")
        table.add_column("Spotify Album", style="cyan")
        table.add_column("Tracks", justify="right")
        table.add_column("Tier")
        for m in summary.matched:
            table.add_row(
                escape(_truncate(m.record.display_name, max_width)),
                escape(
                    _truncate(
                        f"{m.candidate.artist_display} - {m.candidate.display_title}", max_width
                    )
                ),
                str(len(m.track_uris)),
                m.tier.value,
            )
        console.print(table)

    if summary.unmatched:
        table = create_table(
            title=f"[bold red]NOT FOUND[/bold red] — {len(summary.unmatched)} records"
        )
        table.add_column("Record")
        table.add_column("Reason", style="dim")
        for u in summary.unmatched:
            table.add_row(
                format_track(
                    escape(_truncate(u.record.artist or "Unknown", max_width)),
                    escape(_truncate(u.record.title or "Unknown", max_width)),
                ),
                u.reason.value,
            )
        console.print(table)

    if dry_run:
        info(f"Dry run: {track_count} tracks would be added. No playlist was created.")
    elif summary.added_count > 0:
        success(f"Successfully created playlist with {summary.added_count} tracks!")
        if summary.playlist is not None and summary.playlist.url:
            info(summary.playlist.url)
    else:
        warning("No tracks were found; the playlist was created empty.")


def _write_summary_json(summary: ConversionSummary, output_path: Path) -> None:
    """Write the conversion summary as JSON atomically."""
    data = {"generated": datetime.now(tz=timezone.utc).isoformat(), **summary.to_dict()}
    content = json.dumps(data, indent=2, ensure_ascii=True) + "\n"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=output_path.parent, prefix=".summary-", suffix=".tmp")
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        Path(tmp_path).replace(output_path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise
