r"""
バッチ型媒介中心性計算のエントリポイント

指定したソース頂点の集合から push / pull を切り替える多始点BFSを行い、
Brandes のアルゴリズムを行列形式に一般化した後退累積で中心性を求める。

                              ____
                              \      sigma(s,t | i)
   Betweenness centrality =    \    ----------------
          of node i            /       sigma(s,t)
                              /___
                           s != i != t

ソースを全頂点の部分集合にした場合は近似値となる。
"""

import logging
from typing import Optional, Sequence

import numpy as np

from ..exceptions import InvalidArgument, InvalidGraph, OutOfMemory
from ..graph import GraphHandle
from .accumulator import backward_sweep, finalize_centrality
from .frontier import forward_sweep
from .options import EngineOptions

logger = logging.getLogger(__name__)


def _validate_sources(sources: Sequence[int], n: int) -> np.ndarray:
    array = np.asarray(sources)
    if array.ndim != 1:
        raise InvalidArgument(f"ソース頂点は1次元の列である必要があります（次元: {array.ndim}）")
    if array.size == 0:
        raise InvalidArgument("ソース頂点のリストが空です")
    if not np.issubdtype(array.dtype, np.integer):
        raise InvalidArgument(f"ソース頂点IDは整数である必要があります（dtype: {array.dtype}）")
    array = array.astype(np.int64)
    out_of_range = array[(array < 0) | (array >= n)]
    if out_of_range.size:
        raise InvalidArgument(f"範囲外のソース頂点IDがあります: {out_of_range.tolist()}（頂点数: {n}）")
    if np.unique(array).size != array.size:
        raise InvalidArgument("ソース頂点IDが重複しています")
    return array


def compute_betweenness_centrality(sources: Sequence[int], graph: GraphHandle,
                                   options: Optional[EngineOptions] = None,
                                   trace: Optional[list] = None) -> np.ndarray:
    """
    媒介中心性を計算

    Args:
        sources: ソース頂点IDの列（0始まり、重複なし）
        graph: グラフハンドル
        options: 前進・後退スイープの方向ポリシー（Noneの場合は自動切り替え）
        trace: 指定された場合、各ステップの StepRecord を追加するリスト

    Returns:
        長さ n の中心性ベクトル。無向グラフでは (s, t) と (t, s) の両方を数える

    Raises:
        InvalidArgument: ソースが空、範囲外、整数でない、または重複している場合
        InvalidGraph: 隣接行列が正方でない、または必要な転置行列がない場合
        OutOfMemory: 行列の確保に失敗した場合
        EngineFailure: 行列演算でエラーが発生した場合
    """
    if options is None:
        options = EngineOptions()

    n = graph.vertex_count()
    source_ids = _validate_sources(sources, n)

    adjacency = graph.adjacency_pattern()
    if adjacency.shape != (n, n):
        raise InvalidGraph(f"隣接行列が正方ではありません: {adjacency.shape}")
    transpose = graph.transpose_pattern()

    try:
        paths, levels = forward_sweep(adjacency, transpose, source_ids,
                                      policy=options.forward, trace=trace)
        try:
            bc_update = backward_sweep(adjacency, transpose, paths, levels,
                                       policy=options.backward, trace=trace)
        finally:
            levels.clear()
        return finalize_centrality(bc_update, len(source_ids))
    except OutOfMemory:
        raise
    except MemoryError as e:
        raise OutOfMemory(f"中心性計算中に行列の確保に失敗しました（頂点数: {n}, ソース数: {len(source_ids)}）") from e
