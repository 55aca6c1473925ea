"""Top-level click group of the ``discogs-playlist`` command."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from discogs_playlist import __version__
from discogs_playlist.config import Config, get_default_config_path, load_config
from discogs_playlist.exceptions import ConfigError
from discogs_playlist.utils.output import error, set_color, set_verbosity, warning

logger = logging.getLogger(__name__)


class Context:
    """State shared by all subcommands of one invocation."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    def require_config(self) -> Config:
        """Return the loaded config, or the defaults when a command runs standalone."""
        if self.config is None:
            self.config = Config()
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


def _color_wanted(no_color: bool, config: Config | None) -> bool:
    if no_color or "NO_COLOR" in os.environ:
        return False
    return config is None or config.colored_output


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Config file (default: {get_default_config_path()}).",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show informational logs.")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show debug logs; replaces the progress bar with log lines.",
)
@click.option("--quiet", "-q", is_flag=True, default=False, help="Hide config warnings.")
@click.version_option(version=__version__, prog_name="discogs-playlist")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """Turn a Discogs collection export into a Spotify playlist.

    Each record of the exported CSV is searched in the Spotify catalog and
    every match is added to a newly created playlist.

    Examples:

    \b
      discogs-playlist preview collection.csv
      discogs-playlist convert collection.csv --mode album
    """
    if quiet and (verbose or debug):
        raise click.UsageError("--quiet cannot be combined with --verbose or --debug")

    app = ctx.ensure_object(Context)
    app.verbose = verbose or debug
    app.debug = debug
    app.quiet = quiet
    set_verbosity(verbose=verbose, debug=debug)

    try:
        app.config, warnings = load_config(config_path)
    except (ConfigError, OSError) as e:
        set_color(_color_wanted(no_color, None))
        error(str(e), hint="Fix the file or regenerate it with init-config --force")
        ctx.exit(1)

    set_color(_color_wanted(no_color, app.config))
    logger.debug("Using config %s", app.config.config_path or "defaults")

    if not quiet:
        for message in warnings:
            warning(message)


@cli.command("help")
@click.argument("command_name", required=False)
@click.pass_context
def help_cmd(ctx: click.Context, command_name: str | None) -> None:
    """Show help for COMMAND_NAME, or for the whole tool."""
    group_ctx = ctx.parent or ctx
    if command_name is None:
        click.echo(cli.get_help(group_ctx))
        return

    command = cli.get_command(group_ctx, command_name)
    if command is None:
        error(f"Unknown command: {command_name}")
        ctx.exit(1)
    with click.Context(command, info_name=command_name, parent=group_ctx) as sub_ctx:
        click.echo(command.get_help(sub_ctx))


def _register_commands() -> None:
    from discogs_playlist.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


_register_commands()
