"""
Named snapshots.

A snapshot name maps to a file ``<base>/graph/<name>`` holding the encoded
root descriptor of one graph. Saving under an existing name replaces the
file (last writer wins); there is no versioning or deletion.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiofiles.os

from ..config import HistographConfig
from ..graph.directed_graph import DirectedGraph
from .codec import decode_root, encode_root
from .content_store import ContentStore, ensure_dir, read_file, write_file
from .errors import MalformedObject, SnapshotNotFound
from .graph_reader import GraphReader
from .graph_writer import GraphWriter
from .models import GraphHash

logger = logging.getLogger(__name__)

GRAPH_DIR = "graph"


def validate_name(name: str) -> str:
    """Ensure a snapshot name is usable as a single file name."""
    if not name or name in (".", "..") or "/" in name or "\\" in name or "\0" in name:
        raise ValueError(f"Invalid snapshot name: {name!r}")
    return name


class SnapshotRegistry:
    """Binds snapshot names to root descriptors under ``<base>/graph/``."""

    def __init__(self, base_path: Path, config: Optional[HistographConfig] = None):
        self.base_path = Path(base_path)
        self.config = config or HistographConfig()
        self.graph_dir = self.base_path / GRAPH_DIR

    def path_for(self, name: str) -> Path:
        return self.graph_dir / validate_name(name)

    async def exists(self, name: str) -> bool:
        return await aiofiles.os.path.isfile(self.path_for(name))

    async def write_root(self, name: str, root: GraphHash) -> Path:
        """Persist root under name, replacing any previous binding."""
        path = self.path_for(name)
        await ensure_dir(self.graph_dir)
        await write_file(path, encode_root(root), fsync=self.config.fsync)
        logger.info(f"Saved snapshot '{name}' -> {path}")
        return path

    async def read_root(self, name: str) -> GraphHash:
        """
        Look up the root descriptor bound to name.

        Raises:
            SnapshotNotFound: If name is not registered
            MalformedObject: If the stored descriptor has the wrong shape
        """
        path = self.path_for(name)
        try:
            content = await read_file(path)
        except FileNotFoundError:
            raise SnapshotNotFound(name) from None

        try:
            return decode_root(content)
        except MalformedObject as e:
            raise MalformedObject(e.kind, e.reason, path) from e


async def write_graph(base_path: Path, graph: DirectedGraph,
                      config: Optional[HistographConfig] = None) -> GraphHash:
    """Store a graph's objects without naming it."""
    store = ContentStore(base_path, config)
    return await GraphWriter(store).write_graph(graph)


async def read_graph(base_path: Path, root: GraphHash,
                     config: Optional[HistographConfig] = None) -> DirectedGraph:
    store = ContentStore(base_path, config)
    return await GraphReader(store).read_graph(root)


async def save_as(base_path: Path, name: str, graph: DirectedGraph,
                  config: Optional[HistographConfig] = None) -> Path:
    """
    Save a graph under a name.

    Args:
        base_path: Store root directory
        name: Snapshot name (a single path component)
        graph: Graph to save
        config: Storage settings

    Returns:
        Path of the written snapshot file
    """
    registry = SnapshotRegistry(base_path, config)
    registry.path_for(name)  # reject bad names before writing any objects

    root = await write_graph(base_path, graph, config)
    return await registry.write_root(name, root)


async def load(base_path: Path, name: str,
               config: Optional[HistographConfig] = None) -> DirectedGraph:
    """
    Load the graph saved under a name.

    Raises:
        SnapshotNotFound: If name is not registered
        ObjectNotFound: If an object the snapshot references is missing
    """
    root = await SnapshotRegistry(base_path, config).read_root(name)
    graph = await read_graph(base_path, root, config)
    logger.info(f"Loaded snapshot '{name}'")
    return graph


def save_as_sync(base_path: Path, name: str, graph: DirectedGraph,
                 config: Optional[HistographConfig] = None) -> Path:
    """Synchronous wrapper for save_as()."""
    return asyncio.run(save_as(base_path, name, graph, config))


def load_sync(base_path: Path, name: str,
              config: Optional[HistographConfig] = None) -> DirectedGraph:
    """Synchronous wrapper for load()."""
    return asyncio.run(load(base_path, name, config))
