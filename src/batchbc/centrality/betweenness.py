"""
媒介中心性 (Betweenness Centrality) 計算モジュール
"""

import networkx as nx
import numpy as np
from typing import Dict, Hashable, Iterable, Optional, Union
import logging

from ..graph import GraphHandle
from .engine import compute_betweenness_centrality
from .options import DirectionPolicy, EngineOptions
from .sources import select_sources

logger = logging.getLogger(__name__)


class BetweennessCentrality:
    """媒介中心性を計算するクラス"""

    def __init__(self, normalized: bool = False, k: Optional[int] = None, strategy: str = 'degree',
                 seed: Optional[int] = None, direction: str = 'auto',
                 forward_direction: Optional[str] = None, backward_direction: Optional[str] = None):
        """
        初期化

        Args:
            normalized: 正規化するかどうか
            k: サンプリングするソース数（Noneの場合は全ノード、大規模グラフ用）
            strategy: ソースの選択方法（'degree' または 'random'）
            seed: ランダムシード（strategy='random' の場合）
            direction: 探索方向のポリシー（'auto', 'push', 'pull'）
            forward_direction: 前進スイープのみの方向ポリシー（指定時は direction より優先）
            backward_direction: 後退スイープのみの方向ポリシー（指定時は direction より優先）
        """
        self.normalized = normalized
        self.k = k
        self.strategy = strategy
        self.seed = seed
        self.options = EngineOptions(
            forward=DirectionPolicy.parse(forward_direction or direction),
            backward=DirectionPolicy.parse(backward_direction or direction)
        )

    def calculate(self, graph: Union[nx.Graph, GraphHandle], k: Optional[int] = None,
                  seed: Optional[int] = None,
                  sources: Optional[Iterable[Hashable]] = None) -> Dict[Hashable, float]:
        """
        媒介中心性を計算

        Args:
            graph: NetworkXグラフオブジェクトまたはグラフハンドル
            k: サンプリングするソース数（Noneの場合はコンストラクタの設定を使用）
            seed: ランダムシード（Noneの場合はコンストラクタの設定を使用）
            sources: ソースとして使うノードラベル（指定時は k より優先）

        Returns:
            ノードIDをキー、中心性スコアを値とする辞書
        """
        handle = graph if isinstance(graph, GraphHandle) else GraphHandle.from_networkx(graph)
        num_nodes = handle.vertex_count()

        try:
            logger.info(f"媒介中心性の計算を開始します（ノード数: {num_nodes}, エッジ数: {handle.edge_count()}）")

            if num_nodes == 0:
                logger.warning("グラフにノードがありません")
                return {}

            if sources is not None:
                source_ids = [handle.index_of(label) for label in sources]
            else:
                source_ids = select_sources(
                    handle,
                    k=k if k is not None else self.k,
                    strategy=self.strategy,
                    seed=seed if seed is not None else self.seed
                )

            scores = compute_betweenness_centrality(source_ids, handle, options=self.options)
            scores = self._rescale(scores, num_nodes, len(source_ids), handle.is_directed)
            centrality = {handle.label_of(i): float(score) for i, score in enumerate(scores)}

            # 統計情報をログ出力
            values = list(centrality.values())
            logger.info(f"媒介中心性の計算が完了しました（ノード数: {len(centrality)}, ソース数: {len(source_ids)}）")
            logger.info(f"  平均: {np.mean(values):.6f}, 最大: {np.max(values):.6f}, 最小: {np.min(values):.6f}")

            return centrality

        except Exception as e:
            logger.error(f"媒介中心性の計算中にエラーが発生しました: {e}")
            logger.error(f"グラフ情報: ノード数={num_nodes}, エッジ数={handle.edge_count()}")
            raise

    def _rescale(self, scores: np.ndarray, n: int, ns: int, directed: bool) -> np.ndarray:
        """
        NetworkXと同じ規約でスコアをスケーリング

        エンジンは (s, t) の順序対ごとに数えるため、無向グラフでは正規化しない場合に半分にする。
        ソースをサンプリングした場合は n / ns 倍して全ソース分に外挿する。
        """
        scale = None
        if self.normalized:
            if n > 2:
                scale = 1.0 / ((n - 1) * (n - 2))
        elif not directed:
            scale = 0.5

        if ns < n:
            scale = (scale if scale is not None else 1.0) * n / ns

        if scale is None:
            return scores
        return scores * scale
