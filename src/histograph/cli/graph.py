"""Graph snapshot commands for histograph CLI."""
import asyncio
import json
from pathlib import Path
from typing import Optional

import click
import yaml

from histograph.config import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE
from histograph.graph import dump_graph_file, graph_to_dict, load_graph_file
from histograph.storage import (
    ContentHash,
    ContentStore,
    GraphHash,
    Partition,
    SnapshotRegistry,
    StorageError,
    load,
    save_as,
)
from histograph.storage.snapshots import read_graph
from histograph.storage.graph_writer import vertex_hash

from .common import (
    VERBOSITY_NORMAL,
    echo_normal,
    echo_quiet,
    echo_verbose,
    fail,
    load_config,
    resolve_base_path,
)


async def _save_and_read_root(base_path, name, graph, config):
    path = await save_as(base_path, name, graph, config)
    root = await SnapshotRegistry(base_path, config).read_root(name)
    return path, root


@click.group()
def graph_group():
    """Graph snapshot commands."""
    pass


@graph_group.command("init")
@click.pass_context
def init(ctx) -> None:
    """Initialize a graph store.

    Creates the base directory and a config.yaml with default settings.
    An existing config.yaml is left untouched.
    """
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)
    base_path = resolve_base_path(ctx)

    base_path.mkdir(parents=True, exist_ok=True)
    echo_normal(f" ✓ Created directory: {base_path}", verbosity)

    config_path = base_path / CONFIG_FILENAME
    if config_path.exists():
        echo_normal(f" ✓ Config already exists: {config_path}", verbosity)
    else:
        config_path.write_text(DEFAULT_CONFIG_TEMPLATE)
        echo_normal(f" ✓ Created config: {config_path}", verbosity)


@graph_group.command("save")
@click.argument('name')
@click.argument('graph_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def save(ctx, name: str, graph_file: Path) -> None:
    """Save the graph described in GRAPH_FILE under NAME.

    GRAPH_FILE is YAML (or JSON, by .json suffix) with 'vertices' and 'edges'.

    Examples:
        histograph save g1 graph.yaml
    """
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)
    base_path = resolve_base_path(ctx)
    config = load_config(ctx)

    try:
        graph = load_graph_file(graph_file)
    except (ValueError, TypeError, yaml.YAMLError) as e:
        fail(f"Invalid graph file {graph_file}: {e}", verbosity)

    echo_verbose(f"Read {len(graph)} vertices and {graph.edge_count} edges from {graph_file}", verbosity)

    try:
        path, root = asyncio.run(_save_and_read_root(base_path, name, graph, config))
    except (StorageError, ValueError) as e:
        fail(f"Failed to save graph: {e}", verbosity)

    echo_normal(click.style(f"✓ Saved '{name}'", fg="green", bold=True), verbosity)
    echo_normal(f"  Path: {path}", verbosity)
    echo_normal(f"  Vertex manifest: {click.style(str(root.vertex_manifest_hash), fg='cyan')}", verbosity)
    echo_normal(f"  Edge manifest:   {click.style(str(root.edge_manifest_hash), fg='cyan')}", verbosity)


def parse_root(value: str) -> GraphHash:
    """Parse a VERTEXVEC:EDGEVEC pair of manifest keys."""
    vertex_key, sep, edge_key = value.partition(":")
    if not sep:
        raise ValueError(f"Root must be VERTEXVEC:EDGEVEC, got {value!r}")
    return GraphHash(
        vertex_manifest_hash=ContentHash.from_key_string(vertex_key),
        edge_manifest_hash=ContentHash.from_key_string(edge_key),
    )


async def _manifests_present(store: ContentStore, root: GraphHash):
    return await asyncio.gather(
        store.contains(Partition.VERTEX_MANIFEST, root.vertex_manifest_hash),
        store.contains(Partition.EDGE_MANIFEST, root.edge_manifest_hash),
    )


@graph_group.command("load")
@click.argument('name', required=False)
@click.option('--root', 'root_keys', default=None, metavar='VERTEXVEC:EDGEVEC',
              help='Load by manifest hashes instead of by name')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), default=None,
              help='Write the graph description to a file instead of stdout')
@click.option('--json-output', is_flag=True, help='Output as JSON')
@click.pass_context
def load_command(ctx, name: Optional[str], root_keys: Optional[str],
                 output: Optional[Path], json_output: bool) -> None:
    """Load the graph saved under NAME, or the graph named by --root.

    Examples:
        histograph load g1
        histograph load g1 --output restored.yaml
        histograph load --root <vertexvec-hash>:<edgevec-hash> --json-output
    """
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)
    base_path = resolve_base_path(ctx)
    config = load_config(ctx)

    if (name is None) == (root_keys is None):
        fail("Give exactly one of NAME or --root", verbosity)

    try:
        if root_keys is not None:
            graph = asyncio.run(read_graph(base_path, parse_root(root_keys), config))
        else:
            graph = asyncio.run(load(base_path, name, config))
    except (StorageError, ValueError) as e:
        fail(f"Failed to load graph: {e}", verbosity)

    if output is not None:
        dump_graph_file(graph, output)
        echo_normal(click.style(f"✓ Wrote {output}", fg="green"), verbosity)
    elif json_output:
        click.echo(json.dumps(graph_to_dict(graph), indent=2))
    else:
        click.echo(yaml.dump(graph_to_dict(graph), default_flow_style=None), nl=False)


@graph_group.command("show")
@click.argument('name')
@click.option('--json-output', is_flag=True, help='Output as JSON')
@click.pass_context
def show(ctx, name: str, json_output: bool) -> None:
    """Show the root descriptor saved under NAME.

    Manifests missing from the store are flagged.
    """
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)
    base_path = resolve_base_path(ctx)
    config = load_config(ctx)

    try:
        root = asyncio.run(SnapshotRegistry(base_path, config).read_root(name))
    except (StorageError, ValueError) as e:
        fail(f"Failed to read snapshot: {e}", verbosity)

    vertex_present, edge_present = asyncio.run(
        _manifests_present(ContentStore(base_path, config), root))

    if json_output:
        output = root.to_dict()
        output["vertex_manifest_present"] = vertex_present
        output["edge_manifest_present"] = edge_present
        click.echo(json.dumps(output, indent=2))
        return

    def missing(present: bool) -> str:
        return "" if present else click.style("  (missing)", fg="red")

    echo_normal(click.style(f"Snapshot '{name}'", fg="cyan", bold=True), verbosity)
    echo_quiet(f"vertexvec {root.vertex_manifest_hash}{missing(vertex_present)}", verbosity)
    echo_quiet(f"edgevec   {root.edge_manifest_hash}{missing(edge_present)}", verbosity)


@graph_group.command("hash")
@click.argument('vertex_id', type=int)
@click.pass_context
def hash_command(ctx, vertex_id: int) -> None:
    """Print the object key of a vertex id."""
    verbosity = ctx.obj.get('verbosity', VERBOSITY_NORMAL)
    try:
        echo_quiet(vertex_hash(vertex_id).to_key_string(), verbosity)
    except ValueError as e:
        fail(str(e), verbosity)
