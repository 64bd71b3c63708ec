"""
Data models for stored graph objects.

Edges are stored by the hashes of their endpoint vertex objects, never by
vertex id. A snapshot root holds the hashes of the two manifests.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .content_hash import ContentHash


@dataclass(frozen=True)
class HashEdge:
    """An edge expressed by the content hashes of its endpoint vertex objects."""
    from_hash: ContentHash
    to_hash: ContentHash


@dataclass(frozen=True)
class GraphHash:
    """Root descriptor of a graph snapshot."""
    vertex_manifest_hash: ContentHash
    edge_manifest_hash: ContentHash

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "vertex_manifest_hash": self.vertex_manifest_hash.to_key_string(),
            "edge_manifest_hash": self.edge_manifest_hash.to_key_string(),
        }
