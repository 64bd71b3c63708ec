"""Shared utilities for histograph CLI commands."""
import sys
from pathlib import Path

import click

from histograph.config import HistographConfig, get_base_path

# Verbosity levels
VERBOSITY_QUIET = 0
VERBOSITY_NORMAL = 1
VERBOSITY_VERBOSE = 2


def should_print(verbosity: int, message_level: int) -> bool:
    return verbosity >= message_level


def echo_verbose(message: str, verbosity: int) -> None:
    """Print a message only in verbose mode."""
    if should_print(verbosity, VERBOSITY_VERBOSE):
        click.echo(message, err=False)


def echo_normal(message: str, verbosity: int) -> None:
    """Print a message in normal and verbose modes."""
    if should_print(verbosity, VERBOSITY_NORMAL):
        click.echo(message, err=False)


def echo_quiet(message: str, verbosity: int) -> None:
    """Print a message that is shown even in quiet mode."""
    click.echo(message, err=False)


def fail(message: str, verbosity: int) -> None:
    """Print an error in red and exit with status 1."""
    echo_quiet(click.style(f"Error: {message}", fg="red"), verbosity)
    sys.exit(1)


def resolve_base_path(ctx: click.Context) -> Path:
    return get_base_path(ctx.obj.get('data_dir'))


def load_config(ctx: click.Context) -> HistographConfig:
    """Load config.yaml from the base path, exiting on invalid settings."""
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)
    try:
        return HistographConfig.load(resolve_base_path(ctx))
    except (ValueError, TypeError) as e:
        fail(f"Invalid configuration: {e}", verbosity)
