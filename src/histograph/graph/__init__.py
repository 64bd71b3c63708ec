from .directed_graph import VertexId, Edge, DirectedGraph
from .loader import load_graph_file, dump_graph_file, graph_from_dict, graph_to_dict

__all__ = [
    "VertexId", "Edge", "DirectedGraph",
    "load_graph_file", "dump_graph_file", "graph_from_dict", "graph_to_dict",
]
