"""
histograph - content-addressed storage for directed graphs

Every vertex and edge is stored as an immutable object named by its SHA-256
hash. Two manifests list the objects of one graph, and a root descriptor of
the two manifest hashes identifies the whole snapshot, optionally under a
human-chosen name.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import HistographConfig
from .graph import VertexId, Edge, DirectedGraph
from .storage import (
    ContentHash,
    ContentStore,
    GraphHash,
    GraphReader,
    GraphWriter,
    IoFailure,
    MalformedObject,
    ObjectNotFound,
    Partition,
    SnapshotNotFound,
    SnapshotRegistry,
    StorageError,
    load,
    load_sync,
    save_as,
    save_as_sync,
)

__all__ = [
    "HistographConfig",
    "VertexId", "Edge", "DirectedGraph",
    "ContentHash", "ContentStore", "GraphHash", "GraphReader", "GraphWriter",
    "IoFailure", "MalformedObject", "ObjectNotFound", "Partition",
    "SnapshotNotFound", "SnapshotRegistry", "StorageError",
    "load", "load_sync", "save_as", "save_as_sync",
]
