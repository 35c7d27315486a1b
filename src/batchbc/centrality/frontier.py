"""
多始点BFSによるレベル構築モジュール

各ソースからの最短経路数を数えながら幅優先探索を行い、深さごとのフロンティアの
構造を記録する。各ステップでフロンティアの密度から push / pull を切り替える。
"""

import logging
from typing import List, NamedTuple, Optional

import numpy as np
import scipy.sparse as sp

from ..algebra import (
    Direction,
    Representation,
    accumulate,
    count_nonzeros,
    dense_matrix,
    multiply_masked,
    pattern_of,
    set_representation,
    sparse_matrix,
)
from .options import DirectionPolicy, StepRecord

logger = logging.getLogger(__name__)

# フロンティアの密度がこれを超えたら pull
PULL_DENSITY = 0.10
# 直前のステップが pull だった場合はこの密度まで pull を続ける
PULL_HYSTERESIS_DENSITY = 0.06


class ForwardResult(NamedTuple):
    """前進スイープの結果"""

    paths: np.ndarray
    levels: List[sp.csr_array]


def choose_forward_direction(frontier_size: int, ns: int, n: int, last_was_pull: bool,
                             policy: DirectionPolicy = DirectionPolicy.AUTO) -> Direction:
    """
    フロンティアを展開する方向を決定

    Args:
        frontier_size: フロンティアの要素数
        ns: ソース数
        n: 頂点数
        last_was_pull: 直前のステップが pull だったかどうか
        policy: 方向ポリシー（AUTO 以外の場合はその方向に固定）

    Returns:
        評価方向
    """
    if policy is DirectionPolicy.PUSH:
        return Direction.PUSH
    if policy is DirectionPolicy.PULL:
        return Direction.PULL
    density = frontier_size / (ns * n)
    if density > PULL_DENSITY or (density > PULL_HYSTERESIS_DENSITY and last_was_pull):
        return Direction.PULL
    return Direction.PUSH


def forward_sweep(adjacency: sp.csr_array, transpose: sp.csr_array, sources: np.ndarray,
                  policy: DirectionPolicy = DirectionPolicy.AUTO,
                  trace: Optional[list] = None) -> ForwardResult:
    """
    多始点BFSを実行し、最短経路数行列と深さごとのレベル構造を作成

    Args:
        adjacency: 隣接行列の構造 (n × n)
        transpose: 隣接行列の転置の構造（対称な場合は adjacency と同じもの）
        sources: ソース頂点IDの配列（長さ ns）
        policy: 方向ポリシー
        trace: 指定された場合、各ステップの StepRecord を追加するリスト

    Returns:
        paths (ns × n の密行列) と levels（levels[d] は深さ d+1 で発見された
        (ソース, 頂点) の構造）
    """
    n = adjacency.shape[0]
    ns = len(sources)
    rows = np.arange(ns)

    # paths(i, s(i)) = frontier(i, s(i)) = 1
    paths = dense_matrix(ns, n)
    paths[rows, sources] = 1.0
    frontier = sparse_matrix(rows, sources, np.ones(ns), (ns, n))

    # 最初のフロンティア: frontier<!paths> = frontier * A
    frontier = multiply_masked(frontier, adjacency, mask=paths, complement=True)

    levels: List[sp.csr_array] = []
    last_was_pull = False
    last_frontier_size = 0
    frontier_size = count_nonzeros(frontier)

    depth = 0
    while frontier_size > 0 and depth < n:
        levels.append(pattern_of(frontier))

        # paths += frontier
        accumulate(paths, np.add, frontier)

        density = frontier_size / (ns * n)
        growing = frontier_size > last_frontier_size
        direction = choose_forward_direction(frontier_size, ns, n, last_was_pull, policy)
        logger.debug(
            f"前進 深さ={depth} フロンティア={frontier_size} 密度={density:.4f} "
            f"増加={growing} 方向={direction.value}"
        )
        if trace is not None:
            trace.append(StepRecord('forward', depth, frontier_size, density, direction))

        if direction is Direction.PULL:
            # frontier<!paths> = frontier * AT'
            frontier = set_representation(frontier, Representation.BITMAP)
            frontier = multiply_masked(frontier, transpose, mask=paths, complement=True,
                                       direction=Direction.PULL)
        else:
            # frontier<!paths> = frontier * A
            frontier = set_representation(frontier, Representation.SPARSE)
            frontier = multiply_masked(frontier, adjacency, mask=paths, complement=True)

        last_frontier_size = frontier_size
        last_was_pull = direction is Direction.PULL
        frontier_size = count_nonzeros(frontier)
        depth += 1

    logger.debug(f"前進スイープ完了（深さ: {depth}）")
    return ForwardResult(paths, levels)
