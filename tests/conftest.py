"""Pytest fixtures for histograph tests"""
from pathlib import Path

import pytest

from histograph.config import HistographConfig
from histograph.graph import DirectedGraph, Edge
from histograph.storage import ContentStore, GraphReader, GraphWriter


@pytest.fixture
def base_path(tmp_path) -> Path:
    """Empty store root inside the test's temp directory."""
    return tmp_path / "store"


@pytest.fixture
def store(base_path) -> ContentStore:
    return ContentStore(base_path, HistographConfig(max_concurrency=8))


@pytest.fixture
def writer(store) -> GraphWriter:
    return GraphWriter(store)


@pytest.fixture
def reader(store) -> GraphReader:
    return GraphReader(store)


@pytest.fixture
def sample_graph() -> DirectedGraph:
    """Vertices {28, 29, 30} with edges 28->29 and 28->30."""
    return DirectedGraph(
        vertices=[28, 29, 30],
        edges=[Edge.of(28, 29), Edge.of(28, 30)],
    )
