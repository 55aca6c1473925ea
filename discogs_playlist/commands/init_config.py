"""Write a commented starter config file."""

from __future__ import annotations

import os
from importlib import resources
from pathlib import Path

import click

from discogs_playlist.config import get_default_config_path
from discogs_playlist.utils.output import console, error, info, success


def _load_example_config() -> str:
    """Load the example configuration from package data."""
    return resources.files("discogs_playlist").joinpath("config.example.toml").read_text()


def _write_private(path: Path, content: str) -> None:
    """Write *path* readable by the owner only; it may hold an access token."""
    path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)
    # O_CREAT mode does not apply to a file that already existed
    path.chmod(0o600)


@click.command("init-config")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite an existing file.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the file (default: ~/.config/discogs-playlist/config.toml).",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    default=False,
    help="Print the example config instead of writing a file.",
)
def cli(force: bool, output: Path | None, to_stdout: bool) -> None:
    """Create a config file listing every option with its default.

    Examples:

    \b
      discogs-playlist init-config
      discogs-playlist init-config --output ./discogs.toml --force
      discogs-playlist init-config --stdout > config.toml
    """
    content = _load_example_config()

    if to_stdout:
        console.out(content, end="", highlight=False)
        return

    target = (output or get_default_config_path()).expanduser().resolve()

    if target.exists() and not force:
        error(f"Config file already exists: {target}", hint="Use --force to overwrite")
        raise SystemExit(1)

    try:
        _write_private(target, content)
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    success(f"Created config file: {target}")
    info("Set access_token in [spotify], or pass --token to convert.")
