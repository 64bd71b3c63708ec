"""Graph description files.

A description is a YAML or JSON document of the form::

    vertices: [28, 29, 30]
    edges:
      - [28, 29]
      - [28, 30]

The format is chosen by file suffix (.json for JSON, anything else YAML).
"""
import json
from pathlib import Path
from typing import Any, Dict

import yaml

from .directed_graph import DirectedGraph, Edge


def graph_from_dict(data: Dict[str, Any]) -> DirectedGraph:
    """Build a graph from a parsed description.

    Raises:
        ValueError: If the description is not a mapping or an edge is not a pair
    """
    if not isinstance(data, dict):
        raise ValueError("Graph description must be a mapping with 'vertices' and 'edges'")

    graph = DirectedGraph()
    for v in data.get("vertices") or []:
        graph.add_vertex(v)

    for item in data.get("edges") or []:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Edge must be a pair of vertex ids, got {item!r}")
        graph.add_edge(Edge.of(item[0], item[1]))

    return graph


def graph_to_dict(graph: DirectedGraph) -> Dict[str, Any]:
    """Convert a graph to a description, sorted for stable output."""
    return {
        "vertices": sorted(int(v) for v in graph.vertices()),
        "edges": sorted([int(e.from_vertex), int(e.to_vertex)] for e in graph.edges()),
    }


def load_graph_file(path: Path) -> DirectedGraph:
    path = Path(path)
    text = path.read_text()
    if path.suffix == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text) or {}
    return graph_from_dict(data)


def dump_graph_file(graph: DirectedGraph, path: Path) -> None:
    path = Path(path)
    data = graph_to_dict(graph)
    if path.suffix == ".json":
        path.write_text(json.dumps(data, indent=2))
    else:
        path.write_text(yaml.dump(data, default_flow_style=None))
