"""Configuration management commands for histograph CLI."""
import click
import yaml

from histograph.config import CONFIG_FILENAME, HistographConfig

from .common import VERBOSITY_NORMAL, echo_normal, echo_quiet, fail, resolve_base_path


@click.group()
def config_group():
    """Configuration management commands."""
    pass


@config_group.command('set', context_settings={"ignore_unknown_options": True})
@click.argument('key')
@click.argument('value')
@click.pass_context
def config_set(ctx, key: str, value: str) -> None:
    """Set a configuration value.

    Examples:
        histograph config set storage.max_concurrency 16
        histograph config set storage.fsync true
    """
    base_path = resolve_base_path(ctx)
    config_path = base_path / CONFIG_FILENAME
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)

    if not config_path.exists():
        fail("Store not initialized. Run 'histograph init' first.", verbosity)

    config_data = yaml.safe_load(config_path.read_text()) or {}

    # Parse nested keys (e.g., 'storage.fsync')
    keys = key.split('.')
    current = config_data
    for k in keys[:-1]:
        if not isinstance(current.get(k), dict):
            current[k] = {}
        current = current[k]
    current[keys[-1]] = yaml.safe_load(value)

    try:
        HistographConfig.from_dict(config_data)
    except (ValueError, TypeError) as e:
        fail(f"Invalid value for {key}: {e}", verbosity)

    config_path.write_text(yaml.dump(config_data, default_flow_style=False))
    echo_normal(click.style(f"✓ Set {key} = {value}", fg="green"), verbosity)


@config_group.command('get')
@click.argument('key')
@click.pass_context
def config_get(ctx, key: str) -> None:
    """Get a configuration value.

    Examples:
        histograph config get storage.max_concurrency
    """
    base_path = resolve_base_path(ctx)
    config_path = base_path / CONFIG_FILENAME
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)

    if not config_path.exists():
        fail("Store not initialized. Run 'histograph init' first.", verbosity)

    current = yaml.safe_load(config_path.read_text()) or {}
    for k in key.split('.'):
        if not isinstance(current, dict) or k not in current:
            echo_quiet(click.style(f"Key '{key}' not found", fg="yellow"), verbosity)
            ctx.exit(1)
        current = current[k]

    echo_quiet(str(current), verbosity)


@config_group.command('show')
@click.pass_context
def config_show(ctx) -> None:
    """Display full configuration."""
    base_path = resolve_base_path(ctx)
    config_path = base_path / CONFIG_FILENAME
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)

    if not config_path.exists():
        fail("Store not initialized. Run 'histograph init' first.", verbosity)

    echo_normal(click.style("Current configuration:", fg="cyan", bold=True), verbosity)
    echo_quiet(config_path.read_text(), verbosity)
