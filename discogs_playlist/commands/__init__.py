"""Subcommands of the discogs-playlist CLI.

Every public module of this package that defines a click command named
``cli`` is registered on the top-level group, in module name order.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
import sys
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0  # finished, also when nothing matched
EXIT_AUTH_ERROR = 1  # no token, or token rejected
EXIT_INPUT_ERROR = 2  # collection file unusable
EXIT_CONVERT_ERROR = 3  # playlist could not be created or filled


def _command_modules() -> list[str]:
    package_path = sys.modules[__name__].__path__
    return sorted(
        info.name for info in pkgutil.iter_modules(package_path) if not info.name.startswith("_")
    )


def discover_commands() -> Iterator[click.Command]:
    """Yield the ``cli`` command of every command module."""
    for name in _command_modules():
        module = importlib.import_module(f"{__name__}.{name}")
        command = getattr(module, "cli", None)
        if isinstance(command, click.Command):
            logger.debug("Registering command %s from %s", command.name, module.__name__)
            yield command
