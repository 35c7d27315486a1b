"""Tests for the multi-source BFS level construction."""

import networkx as nx
import numpy as np
import pytest

from batchbc.algebra import Direction
from batchbc.centrality import DirectionPolicy, choose_forward_direction, forward_sweep
from batchbc.graph import GraphHandle


def sweep(graph, sources, policy=DirectionPolicy.AUTO, trace=None):
    handle = GraphHandle.from_networkx(graph)
    return forward_sweep(
        handle.adjacency_pattern(),
        handle.transpose_pattern(),
        np.asarray(sources, dtype=np.int64),
        policy=policy,
        trace=trace,
    )


class TestPathCounts:
    """Shortest-path counts against a plain BFS."""

    @pytest.mark.parametrize("source", [0, 3, 17])
    def test_single_source_undirected(self, karate_graph, reference_counts, source):
        """Counts for one source equal the queue-based BFS counts."""
        result = sweep(karate_graph, [source])

        expected = reference_counts(karate_graph, source)
        np.testing.assert_array_equal(
            result.paths[0], [expected[v] for v in karate_graph.nodes()]
        )

    @pytest.mark.parametrize("source", [0, 5, 11])
    def test_single_source_directed(self, directed_graph, reference_counts, source):
        result = sweep(directed_graph, [source])

        expected = reference_counts(directed_graph, source)
        np.testing.assert_array_equal(
            result.paths[0], [expected[v] for v in directed_graph.nodes()]
        )

    def test_batched_rows_match_single_sources(self, directed_graph):
        """Each row of a batched sweep equals the sweep from that source alone."""
        sources = [2, 9, 0, 21]
        batched = sweep(directed_graph, sources)

        for row, source in enumerate(sources):
            single = sweep(directed_graph, [source])
            np.testing.assert_array_equal(batched.paths[row], single.paths[0])

    def test_diamond_has_two_paths(self):
        """Two shortest paths reach the far corner of a 4-cycle."""
        graph = nx.cycle_graph(4)

        result = sweep(graph, [0])

        np.testing.assert_array_equal(result.paths[0], [1.0, 1.0, 2.0, 1.0])


class TestLevels:
    """Recorded level patterns."""

    def test_levels_partition_reached_pairs(self, karate_graph):
        """Every reached non-source pair appears in exactly one level."""
        sources = [0, 33, 5]
        result = sweep(karate_graph, sources)

        stacked = sum(level.toarray().astype(int) for level in result.levels)
        assert stacked.max() == 1

        reached = result.paths != 0
        reached[np.arange(len(sources)), sources] = False
        np.testing.assert_array_equal(stacked.astype(bool), reached)

    def test_first_level_is_neighbours(self, path_graph):
        """The first recorded level holds the vertices one hop from the source."""
        result = sweep(path_graph, [2])

        np.testing.assert_array_equal(
            result.levels[0].toarray(), [[False, True, False, True, False]]
        )
        assert len(result.levels) == 2

    def test_level_depth_is_bfs_distance(self, directed_graph):
        source = 4
        result = sweep(directed_graph, [source])

        distances = nx.single_source_shortest_path_length(directed_graph, source)
        for depth, level in enumerate(result.levels):
            vertices = set(np.nonzero(level.toarray()[0])[0].tolist())
            assert vertices == {v for v, d in distances.items() if d == depth + 1}

    def test_isolated_source_has_no_levels(self):
        graph = nx.Graph()
        graph.add_nodes_from(range(3))
        graph.add_edge(1, 2)

        result = sweep(graph, [0])

        assert result.levels == []
        np.testing.assert_array_equal(result.paths, [[1.0, 0.0, 0.0]])


class TestForwardDirection:
    """Push/pull heuristic for the forward sweep."""

    @pytest.mark.parametrize(
        "frontier_size, last_was_pull, expected",
        [
            (11, False, Direction.PULL),
            (11, True, Direction.PULL),
            (7, True, Direction.PULL),
            (7, False, Direction.PUSH),
            (5, True, Direction.PUSH),
            (10, False, Direction.PUSH),
        ],
    )
    def test_density_thresholds(self, frontier_size, last_was_pull, expected):
        assert choose_forward_direction(frontier_size, 1, 100, last_was_pull) is expected

    def test_forced_policies(self):
        assert choose_forward_direction(90, 1, 100, True, DirectionPolicy.PUSH) is Direction.PUSH
        assert choose_forward_direction(0, 1, 100, False, DirectionPolicy.PULL) is Direction.PULL

    def test_dense_frontier_pulls(self):
        """A complete graph starts with a dense frontier."""
        trace = []
        sweep(nx.complete_graph(5), list(range(5)), trace=trace)

        assert trace[0].phase == "forward"
        assert trace[0].direction is Direction.PULL

    @pytest.mark.parametrize("policy", [DirectionPolicy.PUSH, DirectionPolicy.PULL])
    def test_forced_policy_gives_same_paths(self, karate_graph, policy):
        sources = list(range(0, 34, 3))
        auto = sweep(karate_graph, sources)

        trace = []
        forced = sweep(karate_graph, sources, policy=policy, trace=trace)

        np.testing.assert_array_equal(forced.paths, auto.paths)
        assert len(forced.levels) == len(auto.levels)
        expected = Direction.PUSH if policy is DirectionPolicy.PUSH else Direction.PULL
        assert all(record.direction is expected for record in trace)
