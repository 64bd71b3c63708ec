"""
Graph Reader - reconstructs an in-memory graph from a root descriptor

Read path: root -> manifests -> objects -> graph. Edge objects hold vertex
object hashes, so every edge costs two further vertex fetches.
"""

import asyncio
import logging
from typing import List

from ..graph.directed_graph import DirectedGraph, Edge, VertexId
from .codec import decode_hash_edge, decode_manifest, decode_vertex
from .content_hash import ContentHash
from .content_store import ContentStore, Partition
from .errors import MalformedObject
from .models import GraphHash

logger = logging.getLogger(__name__)


class GraphReader:
    """
    Reads graphs from a ContentStore.

    Any missing or malformed object aborts the whole read; no partially
    built graph is ever returned.
    """

    def __init__(self, store: ContentStore):
        self.store = store

    async def _get_decoded(self, partition: Partition, content_hash: ContentHash, decode):
        content = await self.store.get(partition, content_hash)
        try:
            return decode(content)
        except MalformedObject as e:
            raise MalformedObject(e.kind, e.reason, self.store.object_path(partition, content_hash)) from e

    async def read_vertex(self, content_hash: ContentHash) -> VertexId:
        return await self._get_decoded(Partition.VERTEX, content_hash, decode_vertex)

    async def read_edge(self, content_hash: ContentHash) -> Edge:
        """Fetch an edge object and resolve both endpoints to vertex ids."""
        hash_edge = await self._get_decoded(Partition.EDGE, content_hash, decode_hash_edge)
        from_vertex, to_vertex = await asyncio.gather(
            self.read_vertex(hash_edge.from_hash),
            self.read_vertex(hash_edge.to_hash),
        )
        return Edge(from_vertex, to_vertex)

    async def read_vertices(self, manifest_hash: ContentHash) -> List[VertexId]:
        """
        Read a vertex manifest and every vertex it lists.

        Returns:
            Vertex ids in manifest order
        """
        hashes = await self._get_decoded(Partition.VERTEX_MANIFEST, manifest_hash, decode_manifest)
        return list(await asyncio.gather(*(self.read_vertex(h) for h in hashes)))

    async def read_edges(self, manifest_hash: ContentHash) -> List[Edge]:
        """
        Read an edge manifest and every edge it lists.

        Returns:
            Edges in manifest order
        """
        hashes = await self._get_decoded(Partition.EDGE_MANIFEST, manifest_hash, decode_manifest)
        return list(await asyncio.gather(*(self.read_edge(h) for h in hashes)))

    async def read_graph(self, root: GraphHash) -> DirectedGraph:
        """
        Reconstruct the graph named by a root descriptor.

        Vertices are inserted before edges. Edges whose endpoints are absent
        from the vertex manifest are kept, which adds those endpoints to the
        graph; a warning is logged.
        """
        vertices, edges = await asyncio.gather(
            self.read_vertices(root.vertex_manifest_hash),
            self.read_edges(root.edge_manifest_hash),
        )

        manifest_vertices = set(vertices)
        dangling = [
            e for e in edges
            if e.from_vertex not in manifest_vertices or e.to_vertex not in manifest_vertices
        ]
        if dangling:
            logger.warning(
                f"Graph {root.vertex_manifest_hash}/{root.edge_manifest_hash} has "
                f"{len(dangling)} edge(s) with endpoints missing from its vertex manifest"
            )

        graph = DirectedGraph()
        for v in vertices:
            graph.add_vertex(v)
        for e in edges:
            graph.add_edge(e)

        logger.info(f"Read graph ({len(graph)} vertices, {graph.edge_count} edges)")
        return graph
