"""
辺リストからグラフを構築するモジュール
"""

import networkx as nx
from typing import Hashable, Iterable, Optional, Tuple
import logging

from .handle import GraphHandle

logger = logging.getLogger(__name__)


class GraphBuilder:
    """辺リストからNetworkXグラフとグラフハンドルを構築するクラス"""

    def __init__(self, directed: bool = False, self_loops: bool = True):
        """
        初期化

        Args:
            directed: 有向グラフかどうか
            self_loops: 自己ループを残すかどうか
        """
        self.directed = directed
        self.self_loops = self_loops

    def build_graph(self, edges: Iterable[Tuple[Hashable, Hashable]],
                    num_nodes: Optional[int] = None) -> nx.Graph:
        """
        辺リストからグラフを構築

        Args:
            edges: (始点, 終点) のタプルの列
            num_nodes: 指定された場合、0..num_nodes-1 のノードを先に追加する（孤立点を残すため）

        Returns:
            NetworkXグラフオブジェクト
        """
        graph = nx.DiGraph() if self.directed else nx.Graph()

        try:
            if num_nodes is not None:
                graph.add_nodes_from(range(num_nodes))

            skipped = 0
            for source, target in edges:
                if source == target and not self.self_loops:
                    skipped += 1
                    continue
                graph.add_edge(source, target)

            if skipped:
                logger.info(f"{skipped}個の自己ループを除外しました")

            logger.info(f"グラフを構築しました（ノード数: {graph.number_of_nodes()}, エッジ数: {graph.number_of_edges()}）")
            return graph

        except Exception as e:
            logger.error(f"グラフの構築中にエラーが発生しました: {e}")
            raise

    def build_handle(self, edges: Iterable[Tuple[Hashable, Hashable]],
                     num_nodes: Optional[int] = None) -> GraphHandle:
        """辺リストから中心性計算用のグラフハンドルを構築"""
        return GraphHandle.from_networkx(self.build_graph(edges, num_nodes=num_nodes))
