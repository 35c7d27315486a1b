"""
中心性結果の分析モジュール
"""

import pandas as pd
import networkx as nx
from typing import Dict, Hashable
import logging

logger = logging.getLogger(__name__)


class CentralityReport:
    """媒介中心性の計算結果を集計・比較するクラス"""

    def __init__(self, graph: nx.Graph, scores: Dict[Hashable, float]):
        """
        初期化

        Args:
            graph: NetworkXグラフオブジェクト
            scores: ノードIDをキー、中心性スコアを値とする辞書
        """
        self.graph = graph
        self.scores = scores

    def top_nodes(self, top_n: int = 10) -> pd.DataFrame:
        """
        中心性の高いノードを抽出

        Args:
            top_n: 抽出するノード数

        Returns:
            node_id, degree, betweenness 列を持つDataFrame（中心性の降順）
        """
        rows = [
            {
                'node_id': node_id,
                'degree': self.graph.degree(node_id),
                'betweenness': self.scores.get(node_id, 0.0),
            }
            for node_id in self.graph.nodes()
        ]

        df = pd.DataFrame(rows, columns=['node_id', 'degree', 'betweenness'])
        if not df.empty:
            df = df.sort_values('betweenness', ascending=False, kind='mergesort').head(top_n)
            df = df.reset_index(drop=True)

        logger.info(f"上位{top_n}ノードの抽出を完了しました")
        return df

    def compare(self, reference: Dict[Hashable, float]) -> pd.DataFrame:
        """
        参照実装の結果と比較

        Args:
            reference: 参照となる中心性スコアの辞書（networkx.betweenness_centrality の結果など）

        Returns:
            node_id, batched, reference, abs_error 列を持つDataFrame
        """
        rows = []
        for node_id in self.graph.nodes():
            batched = self.scores.get(node_id, 0.0)
            expected = reference.get(node_id, 0.0)
            rows.append({
                'node_id': node_id,
                'batched': batched,
                'reference': expected,
                'abs_error': abs(batched - expected),
            })

        df = pd.DataFrame(rows, columns=['node_id', 'batched', 'reference', 'abs_error'])
        max_error = float(df['abs_error'].max()) if not df.empty else 0.0
        logger.info(f"参照実装との比較を完了しました（最大誤差: {max_error:.3e}）")
        return df
