"""Tests for the in-memory graph and graph description files"""

import json

import pytest

from histograph.graph import (
    DirectedGraph,
    Edge,
    VertexId,
    dump_graph_file,
    graph_from_dict,
    load_graph_file,
)


class TestVertexId:

    def test_is_an_int(self):
        assert VertexId(5) == 5
        assert hash(VertexId(5)) == hash(5)

    @pytest.mark.parametrize("value", [-1, 2 ** 64])
    def test_range(self, value):
        with pytest.raises(ValueError):
            VertexId(value)

    @pytest.mark.parametrize("value", ["5", 5.0, True])
    def test_type(self, value):
        with pytest.raises(TypeError):
            VertexId(value)


class TestDirectedGraph:

    def test_add_vertex_is_idempotent(self):
        graph = DirectedGraph()
        graph.add_vertex(1)
        graph.add_vertex(1)
        assert len(graph) == 1

    def test_iteration_keeps_insertion_order(self):
        graph = DirectedGraph(vertices=[3, 1, 2])
        assert list(graph.vertices()) == [3, 1, 2]

    def test_add_edge_adds_endpoints(self):
        graph = DirectedGraph()
        graph.add_vertex(1)
        graph.add_edge(Edge.of(1, 2))
        assert list(graph.vertices()) == [1, 2]
        assert graph.edge_count == 1

    def test_add_edge_keeps_existing_vertex_order(self):
        graph = DirectedGraph(vertices=[3, 1])
        graph.add_edge(Edge.of(1, 3))
        assert list(graph.vertices()) == [3, 1]

    def test_edges_are_directed(self):
        graph = DirectedGraph(edges=[Edge.of(1, 2)])
        assert graph.has_edge(Edge.of(1, 2))
        assert not graph.has_edge(Edge.of(2, 1))

    def test_plain_tuple_edges(self):
        graph = DirectedGraph(vertices=[1, 2])
        graph.add_edge((1, 2))
        assert graph.has_edge(Edge.of(1, 2))
        assert isinstance(next(graph.edges()), Edge)

    def test_equality_ignores_order(self):
        a = DirectedGraph(vertices=[1, 2, 3], edges=[Edge.of(1, 2), Edge.of(2, 3)])
        b = DirectedGraph(vertices=[3, 2, 1], edges=[Edge.of(2, 3), Edge.of(1, 2)])
        assert a == b

    def test_inequality(self):
        assert DirectedGraph(vertices=[1]) != DirectedGraph(vertices=[2])
        assert DirectedGraph(edges=[Edge.of(1, 2)]) != DirectedGraph(edges=[Edge.of(2, 1)])


class TestGraphFiles:

    def test_edge_endpoints_become_vertices(self):
        graph = graph_from_dict({"vertices": [27], "edges": [[28, 29]]})
        assert sorted(graph.vertices()) == [27, 28, 29]

    def test_missing_sections(self):
        assert graph_from_dict({}) == DirectedGraph()

    @pytest.mark.parametrize("data", [[1, 2], {"edges": [[1]]}, {"edges": [[1, 2, 3]]}])
    def test_invalid_descriptions(self, data):
        with pytest.raises(ValueError):
            graph_from_dict(data)

    def test_yaml_round_trip(self, tmp_path, sample_graph):
        path = tmp_path / "graph.yaml"
        dump_graph_file(sample_graph, path)
        assert load_graph_file(path) == sample_graph

    def test_json_file(self, tmp_path, sample_graph):
        path = tmp_path / "graph.json"
        dump_graph_file(sample_graph, path)

        data = json.loads(path.read_text())
        assert data == {"vertices": [28, 29, 30], "edges": [[28, 29], [28, 30]]}
        assert load_graph_file(path) == sample_graph
