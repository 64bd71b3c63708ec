from .errors import StorageError, IoFailure, MalformedObject, ObjectNotFound, SnapshotNotFound
from .content_hash import ContentHash
from .models import HashEdge, GraphHash
from .content_store import ContentStore, Partition
from .graph_writer import GraphWriter
from .graph_reader import GraphReader
from .snapshots import SnapshotRegistry, save_as, load, save_as_sync, load_sync

__all__ = [
    "StorageError", "IoFailure", "MalformedObject", "ObjectNotFound", "SnapshotNotFound",
    "ContentHash", "HashEdge", "GraphHash",
    "ContentStore", "Partition",
    "GraphWriter", "GraphReader",
    "SnapshotRegistry", "save_as", "load", "save_as_sync", "load_sync",
]
