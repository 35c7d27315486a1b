"""
ソース頂点の選択モジュール
"""

import logging
import numbers
from typing import Optional

import numpy as np

from ..exceptions import InvalidArgument
from ..graph import GraphHandle

logger = logging.getLogger(__name__)

STRATEGIES = ('degree', 'random')


def select_sources(graph: GraphHandle, k: Optional[int] = None, strategy: str = 'degree',
                   seed: Optional[int] = None) -> np.ndarray:
    """
    中心性計算に使うソース頂点を選択

    Args:
        graph: グラフハンドル
        k: ソース数（Noneまたは頂点数以上の場合は全頂点）
        strategy: 'degree' は出次数の高い順、'random' は一様ランダムに選ぶ
        seed: ランダムシード（strategy='random' の場合）

    Returns:
        ソース頂点IDの配列
    """
    if strategy not in STRATEGIES:
        raise InvalidArgument(f"不明なソース選択方法です: {strategy!r}（{', '.join(STRATEGIES)} のいずれか）")
    if k is not None and (isinstance(k, bool) or not isinstance(k, numbers.Integral)):
        raise InvalidArgument(f"ソース数は整数である必要があります: {k!r}")
    if k is not None and k <= 0:
        raise InvalidArgument(f"ソース数は正の整数である必要があります: {k}")

    n = graph.vertex_count()
    if k is None or k >= n:
        return np.arange(n, dtype=np.int64)

    if strategy == 'degree':
        # 次数の高いノードを優先的に選択（同じ次数の場合はIDの小さい順）
        degree = graph.out_degree()
        order = np.lexsort((np.arange(n), -degree))
        selected = order[:k].astype(np.int64)
    else:
        rng = np.random.default_rng(seed)
        selected = np.sort(rng.choice(n, size=k, replace=False)).astype(np.int64)

    logger.info(f"サンプリングモード: {n}ノードから{k}個のソースを選択しました（方法: {strategy}）")
    return selected
