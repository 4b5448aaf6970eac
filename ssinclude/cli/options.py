"""Shared CLI options for building expansion settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.logging import RichHandler

from ssinclude.config import SsiOptions, load_config

if TYPE_CHECKING:
    from collections.abc import Callable


def expansion_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --config, --max-depth and --include-type options to a command."""
    options = [
        click.option(
            "--config",
            "-c",
            "config_file",
            type=click.Path(exists=True, dir_okay=False),
            help="YAML file with max_depth / include_file_types / file_type_map",
        ),
        click.option("--max-depth", "-d", type=int, help="Maximum include depth (default: 10)"),
        click.option(
            "--include-type",
            "-t",
            "include_types",
            multiple=True,
            help="File type whose included files are expanded again (repeatable)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_options(
    config_file: str | None,
    max_depth: int | None,
    include_types: tuple[str, ...],
) -> SsiOptions:
    """Combine a config file with command line overrides."""
    options = load_config(config_file) if config_file else SsiOptions()
    return options.evolve(
        max_depth=max_depth,
        include_file_types=include_types or None,
    )


def setup_logging(verbosity: int) -> None:
    """Route library logging through rich on stderr."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger("ssinclude")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
