"""
In-memory directed graph.

Vertices are unsigned 64-bit ids; edges are ordered pairs of vertex ids.
Both collections keep insertion order, but equality compares them as sets.
"""

from typing import Dict, Iterable, Iterator, NamedTuple, Optional


class VertexId(int):
    """An unsigned 64-bit vertex identifier."""

    MAX = 2 ** 64 - 1

    def __new__(cls, value: int) -> "VertexId":
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"VertexId must be an int, got {type(value).__name__}")
        if value < 0 or value > cls.MAX:
            raise ValueError(f"VertexId out of unsigned 64-bit range: {value}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"VertexId({int(self)})"


class Edge(NamedTuple):
    """A directed edge between two vertices."""
    from_vertex: VertexId
    to_vertex: VertexId

    @classmethod
    def of(cls, from_vertex: int, to_vertex: int) -> "Edge":
        return cls(VertexId(from_vertex), VertexId(to_vertex))


class DirectedGraph:
    """
    Directed graph with insertion-ordered vertex and edge sets.

    Adding an edge also adds both of its endpoints as vertices.

    Example:
        graph = DirectedGraph()
        graph.add_vertex(VertexId(1))
        graph.add_edge(Edge.of(1, 2))
    """

    def __init__(self, vertices: Optional[Iterable[int]] = None,
                 edges: Optional[Iterable[Edge]] = None):
        # dicts used as ordered sets
        self._vertices: Dict[VertexId, None] = {}
        self._edges: Dict[Edge, None] = {}

        for v in vertices or ():
            self.add_vertex(v)
        for e in edges or ():
            self.add_edge(e)

    def add_vertex(self, vertex: int) -> None:
        """Add a vertex. Adding an existing vertex is a no-op."""
        self._vertices[VertexId(vertex)] = None

    def add_edge(self, edge: Edge) -> None:
        """Add a directed edge and its endpoints. Adding an existing edge is a no-op."""
        from_vertex, to_vertex = edge
        edge = Edge(VertexId(from_vertex), VertexId(to_vertex))
        self._vertices[edge.from_vertex] = None
        self._vertices[edge.to_vertex] = None
        self._edges[edge] = None

    def vertices(self) -> Iterator[VertexId]:
        return iter(self._vertices)

    def edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def has_vertex(self, vertex: int) -> bool:
        return vertex in self._vertices

    def has_edge(self, edge: Edge) -> bool:
        return tuple(edge) in self._edges

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._vertices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectedGraph):
            return NotImplemented
        return (self._vertices.keys() == other._vertices.keys()
                and self._edges.keys() == other._edges.keys())

    def __repr__(self) -> str:
        return f"DirectedGraph(vertices={len(self._vertices)}, edges={len(self._edges)})"
