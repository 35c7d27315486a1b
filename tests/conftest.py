from collections import deque

import networkx as nx
import pytest

from batchbc.graph import GraphHandle


def reference_path_counts(graph: nx.Graph, source):
    """Count shortest paths from ``source`` with a plain queue-based BFS."""
    distance = {source: 0}
    sigma = {node: 0 for node in graph.nodes()}
    sigma[source] = 1
    queue = deque([source])
    while queue:
        v = queue.popleft()
        for w in graph.successors(v) if graph.is_directed() else graph.neighbors(v):
            if w not in distance:
                distance[w] = distance[v] + 1
                queue.append(w)
            if distance[w] == distance[v] + 1:
                sigma[w] += sigma[v]
    return sigma


@pytest.fixture
def path_graph():
    return nx.path_graph(5)


@pytest.fixture
def path_handle(path_graph):
    return GraphHandle.from_networkx(path_graph)


@pytest.fixture
def star_graph():
    # hub 0 with leaves 1..6
    return nx.star_graph(6)


@pytest.fixture
def directed_graph():
    return nx.gnp_random_graph(30, 0.12, seed=7, directed=True)


@pytest.fixture
def karate_graph():
    return nx.karate_club_graph()


@pytest.fixture
def reference_counts():
    return reference_path_counts
