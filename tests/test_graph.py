"""Tests for the graph handle and builder."""

import networkx as nx
import numpy as np
import pytest
import scipy.sparse as sp

from batchbc.exceptions import InvalidArgument, InvalidGraph
from batchbc.graph import GraphBuilder, GraphHandle, GraphKind


class TestGraphHandle:
    """Adjacency pattern, transpose and symmetry."""

    def test_non_square_matrix(self):
        with pytest.raises(InvalidGraph):
            GraphHandle(sp.csr_array((2, 3)))

    def test_pattern_ignores_values(self):
        handle = GraphHandle(np.array([[0.0, 2.5], [-1.0, 0.0]]))

        pattern = handle.adjacency_pattern()

        assert pattern.dtype == bool
        np.testing.assert_array_equal(pattern.toarray(), [[False, True], [True, False]])

    def test_undirected_transpose_aliases_pattern(self, path_handle):
        assert path_handle.transpose_pattern() is path_handle.adjacency_pattern()
        assert path_handle.pattern_is_symmetric

    def test_directed_transpose(self):
        graph = nx.DiGraph([(0, 1), (1, 2)])
        handle = GraphHandle.from_networkx(graph)

        assert not handle.pattern_is_symmetric
        np.testing.assert_array_equal(
            handle.transpose_pattern().toarray(), handle.adjacency_pattern().toarray().T
        )

    def test_directed_without_cached_transpose(self):
        graph = nx.DiGraph([(0, 1)])
        handle = GraphHandle.from_networkx(graph, cache_transpose=False)

        with pytest.raises(InvalidGraph):
            handle.transpose_pattern()

    def test_symmetric_directed_aliases_pattern(self):
        graph = nx.DiGraph([(0, 1), (1, 0)])
        handle = GraphHandle.from_networkx(graph, cache_transpose=False)

        assert handle.transpose_pattern() is handle.adjacency_pattern()

    def test_labels_follow_node_order(self):
        graph = nx.Graph([("a", "b"), ("b", "c")])
        handle = GraphHandle.from_networkx(graph)

        assert handle.vertex_count() == 3
        assert handle.index_of("b") == 1
        assert handle.label_of(2) == "c"
        with pytest.raises(InvalidArgument):
            handle.index_of("z")

    def test_label_count_mismatch(self):
        with pytest.raises(InvalidGraph):
            GraphHandle(np.zeros((2, 2)), labels=["only"])

    def test_degrees(self, star_graph):
        handle = GraphHandle.from_networkx(star_graph)

        np.testing.assert_array_equal(handle.out_degree(), [6, 1, 1, 1, 1, 1, 1])
        assert handle.edge_count() == 12

    def test_empty_graph(self):
        handle = GraphHandle.from_networkx(nx.Graph())

        assert handle.vertex_count() == 0
        assert handle.kind is GraphKind.UNDIRECTED


class TestGraphBuilder:
    def test_build_undirected(self):
        graph = GraphBuilder().build_graph([(0, 1), (1, 2)], num_nodes=4)

        assert not graph.is_directed()
        assert graph.number_of_nodes() == 4
        assert graph.number_of_edges() == 2

    def test_drop_self_loops(self):
        graph = GraphBuilder(directed=True, self_loops=False).build_graph([(0, 0), (0, 1)])

        assert graph.is_directed()
        assert list(graph.edges()) == [(0, 1)]

    def test_build_handle(self):
        handle = GraphBuilder(directed=True).build_handle([(0, 1), (1, 2), (2, 0)])

        assert handle.is_directed
        assert handle.vertex_count() == 3
        np.testing.assert_array_equal(
            handle.transpose_pattern().toarray(), handle.adjacency_pattern().toarray().T
        )
