"""histograph CLI - content-addressed graph snapshots from the command line

Command groups live in separate modules:
- graph.py: init, save, load, show, hash
- config.py: config set, get, show
- common.py: shared utilities
"""
from pathlib import Path

import click

from .. import __version__
from .common import VERBOSITY_NORMAL, VERBOSITY_QUIET, VERBOSITY_VERBOSE
from .config import config_group
from .graph import graph_group


@click.group()
@click.version_option(version=__version__, prog_name="histograph")
@click.option('--data-dir', type=click.Path(), default=None, envvar='HISTOGRAPH_BASE_PATH',
              help='Base directory of the graph store (default: ~/.histograph)')
@click.option('--verbose', '-v', is_flag=True, default=False,
              help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, default=False,
              help='Suppress non-essential output')
@click.pass_context
def cli(ctx, data_dir, verbose, quiet):
    """histograph - content-addressed storage for directed graphs

    \b
    Examples:
        histograph init
        histograph save g1 graph.yaml
        histograph load g1
        histograph show g1
    """
    ctx.ensure_object(dict)

    if verbose and quiet:
        raise click.UsageError("--verbose and --quiet are mutually exclusive")

    if quiet:
        ctx.obj['verbosity'] = VERBOSITY_QUIET
    elif verbose:
        ctx.obj['verbosity'] = VERBOSITY_VERBOSE
    else:
        ctx.obj['verbosity'] = VERBOSITY_NORMAL

    ctx.obj['data_dir'] = Path(data_dir) if data_dir else None


for command in graph_group.commands.values():
    cli.add_command(command)

cli.add_command(config_group, name='config')


def main():
    cli(obj={})


__all__ = ["cli", "main"]
