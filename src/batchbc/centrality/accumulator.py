"""
依存度の後退累積モジュール

前進スイープで記録したレベル構造を深い方から逆にたどり、各頂点の依存度を
先行頂点へ配分して中心性を求める。
"""

import logging
from typing import List, Optional

import numpy as np
import scipy.sparse as sp

from ..algebra import (
    Direction,
    Representation,
    accumulate,
    count_nonzeros,
    dense_matrix,
    elementwise_combine,
    multiply_masked,
    reduce_columns,
    set_representation,
)
from .options import DirectionPolicy, StepRecord

logger = logging.getLogger(__name__)


def dependency_ratios(bc_update: np.ndarray, paths: np.ndarray, level: sp.csr_array) -> sp.csr_array:
    """W<S[i]> = bc_update ./ paths（レベル i の位置のみ）"""
    return elementwise_combine(np.divide, bc_update, paths, mask=level)


def choose_backward_direction(w_size: int, s_size: int, ns: int, n: int,
                              policy: DirectionPolicy = DirectionPolicy.AUTO) -> Direction:
    """
    依存度を先行頂点へ伝搬する方向を決定

    W の密度が 10% を超え nnz(W)/nnz(S[i-1]) > 1 の場合、または密度が 1% を超え
    nnz(W)/nnz(S[i-1]) > 10 の場合に pull を選ぶ。
    """
    if policy is DirectionPolicy.PUSH:
        return Direction.PUSH
    if policy is DirectionPolicy.PULL:
        return Direction.PULL
    w_density = w_size / (ns * n)
    ratio = w_size / s_size if s_size else float('inf')
    if (w_density > 0.1 and ratio > 1.0) or (w_density > 0.01 and ratio > 10.0):
        return Direction.PULL
    return Direction.PUSH


def backward_sweep(adjacency: sp.csr_array, transpose: sp.csr_array, paths: np.ndarray,
                   levels: List[sp.csr_array], policy: DirectionPolicy = DirectionPolicy.AUTO,
                   trace: Optional[list] = None) -> np.ndarray:
    """
    レベル構造を逆順にたどって依存度を累積

    Args:
        adjacency: 隣接行列の構造
        transpose: 隣接行列の転置の構造
        paths: 前進スイープで得た最短経路数 (ns × n)
        levels: 前進スイープで記録したレベル構造（読み取り専用）
        policy: 方向ポリシー
        trace: 指定された場合、各ステップの StepRecord を追加するリスト

    Returns:
        bc_update (ns × n の密行列)
    """
    ns, n = paths.shape
    bc_update = dense_matrix(ns, n, fill=1.0)

    for i in range(len(levels) - 1, 0, -1):
        w = dependency_ratios(bc_update, paths, levels[i])

        w_size = count_nonzeros(w)
        s_size = count_nonzeros(levels[i - 1])
        direction = choose_backward_direction(w_size, s_size, ns, n, policy)
        density = w_size / (ns * n)
        logger.debug(f"後退 深さ={i} W={w_size} S={s_size} 密度={density:.4f} 方向={direction.value}")
        if trace is not None:
            trace.append(StepRecord('backward', i, w_size, density, direction))

        if direction is Direction.PULL:
            # W<S[i-1]> = W * A'
            w = set_representation(w, Representation.BITMAP)
            w = multiply_masked(w, adjacency, mask=levels[i - 1], direction=Direction.PULL)
        else:
            # W<S[i-1]> = W * AT
            w = set_representation(w, Representation.SPARSE)
            w = multiply_masked(w, transpose, mask=levels[i - 1])

        # bc_update += W .* paths
        accumulate(bc_update, np.add, elementwise_combine(np.multiply, w, paths))

    return bc_update


def finalize_centrality(bc_update: np.ndarray, ns: int) -> np.ndarray:
    """centrality(v) = -ns + sum(bc_update(:, v))"""
    centrality = np.full(bc_update.shape[1], -float(ns))
    return reduce_columns(centrality, np.add, bc_update)
