"""
infixcalc CLI Utilities.

Shared helpers used across CLI modules.
"""

import logging
import os
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from infixcalc._version import get_version
from infixcalc.core.errors import ConfigError
from infixcalc.core.manifest import CalculatorConfig, default_config, find_config, load_config

console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"infixcalc {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def resolve_config(config_path: Path | None) -> CalculatorConfig:
    """Load an explicit config file, or ``infixcalc.toml`` from the cwd if present.

    Exits with code 1 if the file is invalid.
    """
    try:
        if config_path is not None:
            return load_config(config_path)
        found = find_config()
        return load_config(found) if found else default_config()
    except ConfigError as e:
        print_error(e.message)
        raise typer.Exit(code=1) from e


def configure_logging(config: CalculatorConfig, verbose: bool = False) -> None:
    """Set the root log level: --verbose, then LOG_LEVEL, then the config file."""
    if verbose:
        level = logging.DEBUG
    else:
        env_level = os.getenv("LOG_LEVEL", "").upper()
        level = getattr(logging, env_level, None) if env_level else None
        if not isinstance(level, int):
            level = config.log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def print_error(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
