"""
Graph Writer - persists an in-memory graph as content-addressed objects

Write path: vertices and edges -> objects -> manifests -> root descriptor.
Per-object puts run concurrently; a manifest is stored only after every put
it lists has completed.
"""

import asyncio
import logging
from typing import Iterable, List

from ..graph.directed_graph import DirectedGraph, Edge
from .codec import encode_hash_edge, encode_manifest, encode_vertex
from .content_hash import ContentHash
from .content_store import ContentStore, Partition
from .models import GraphHash, HashEdge

logger = logging.getLogger(__name__)


def vertex_hash(vertex_id: int) -> ContentHash:
    """Hash of the vertex object for vertex_id, derived without any I/O."""
    return ContentHash.compute(encode_vertex(vertex_id))


def hash_edge_of(edge: Edge) -> HashEdge:
    """Express an edge by the hashes of its endpoint vertex objects."""
    return HashEdge(from_hash=vertex_hash(edge.from_vertex), to_hash=vertex_hash(edge.to_vertex))


class GraphWriter:
    """
    Writes graphs into a ContentStore.

    The graph is only read; its vertices and edges are encoded up front,
    before any I/O is issued.
    """

    def __init__(self, store: ContentStore):
        self.store = store

    async def _put_all(self, partition: Partition, contents: Iterable[bytes]) -> List[ContentHash]:
        await self.store.ensure_partition(partition)
        # gather keeps input order regardless of completion order
        return list(await asyncio.gather(
            *(self.store.put(partition, content) for content in contents)
        ))

    async def write_vertices(self, graph: DirectedGraph) -> ContentHash:
        """
        Store every vertex and the vertex manifest.

        Returns:
            Hash of the vertex manifest
        """
        encoded = [encode_vertex(v) for v in graph.vertices()]
        hashes = await self._put_all(Partition.VERTEX, encoded)

        manifest_hash = await self.store.put(Partition.VERTEX_MANIFEST, encode_manifest(hashes))
        logger.debug(f"Wrote {len(hashes)} vertices, manifest {manifest_hash}")
        return manifest_hash

    async def write_edges(self, graph: DirectedGraph) -> ContentHash:
        """
        Store every edge and the edge manifest.

        Edge endpoints are referenced by vertex object hash, recomputed from
        the vertex id rather than looked up.

        Returns:
            Hash of the edge manifest
        """
        encoded = [encode_hash_edge(hash_edge_of(e)) for e in graph.edges()]
        hashes = await self._put_all(Partition.EDGE, encoded)

        manifest_hash = await self.store.put(Partition.EDGE_MANIFEST, encode_manifest(hashes))
        logger.debug(f"Wrote {len(hashes)} edges, manifest {manifest_hash}")
        return manifest_hash

    async def write_graph(self, graph: DirectedGraph) -> GraphHash:
        """Write vertices and edges concurrently and return the root descriptor."""
        vertex_manifest_hash, edge_manifest_hash = await asyncio.gather(
            self.write_vertices(graph),
            self.write_edges(graph),
        )
        root = GraphHash(
            vertex_manifest_hash=vertex_manifest_hash,
            edge_manifest_hash=edge_manifest_hash,
        )
        logger.info(
            f"Wrote graph ({len(graph)} vertices, {graph.edge_count} edges): "
            f"vertexvec={vertex_manifest_hash} edgevec={edge_manifest_hash}"
        )
        return root
