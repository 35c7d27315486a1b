"""
グラフハンドルモジュール

隣接行列の構造、転置行列のキャッシュ、対称性フラグを保持する。
"""

import enum
import logging
from typing import Dict, Hashable, List, Optional, Sequence

import networkx as nx
import numpy as np
import scipy.sparse as sp

from ..exceptions import InvalidArgument, InvalidGraph

logger = logging.getLogger(__name__)


class GraphKind(enum.Enum):
    """グラフの種類"""

    UNDIRECTED = "undirected"
    DIRECTED = "directed"


class GraphHandle:
    """中心性計算に必要な隣接構造を提供するクラス"""

    def __init__(self, adjacency, kind: GraphKind = GraphKind.DIRECTED,
                 labels: Optional[Sequence[Hashable]] = None):
        """
        初期化

        Args:
            adjacency: 正方の隣接行列（scipy.sparse または密配列）。値は無視され、構造のみを使用する
            kind: グラフの種類
            labels: 頂点IDに対応するノードラベル（Noneの場合は 0..n-1）
        """
        if not sp.issparse(adjacency):
            adjacency = np.asarray(adjacency)
        if adjacency.ndim != 2 or adjacency.shape[0] != adjacency.shape[1]:
            raise InvalidGraph(f"隣接行列が正方ではありません: {adjacency.shape}")

        n = adjacency.shape[0]
        if sp.issparse(adjacency):
            # 格納されている要素はすべて辺として扱う
            coo = sp.coo_array(adjacency)
            rows, cols = coo.row, coo.col
        else:
            rows, cols = np.nonzero(np.asarray(adjacency))

        self._pattern = sp.csr_array(
            (np.ones(len(rows), dtype=bool), (rows, cols)), shape=(n, n)
        )
        self.kind = kind
        self._transpose: Optional[sp.csr_array] = None
        self._symmetric: Optional[bool] = True if kind is GraphKind.UNDIRECTED else None

        if labels is None:
            labels = range(n)
        self.labels: List[Hashable] = list(labels)
        if len(self.labels) != n:
            raise InvalidGraph(f"ラベル数が頂点数と一致しません: {len(self.labels)} != {n}")
        self._index: Dict[Hashable, int] = {label: i for i, label in enumerate(self.labels)}

    @classmethod
    def from_networkx(cls, graph: nx.Graph, cache_transpose: bool = True) -> 'GraphHandle':
        """
        NetworkXグラフからハンドルを作成

        Args:
            graph: NetworkXグラフオブジェクト
            cache_transpose: 有向グラフの場合に転置行列を事前に計算するかどうか

        Returns:
            グラフハンドル
        """
        nodes = list(graph.nodes())
        if nodes:
            adjacency = nx.to_scipy_sparse_array(graph, nodelist=nodes, weight=None, format='csr')
        else:
            adjacency = sp.csr_array((0, 0), dtype=bool)
        kind = GraphKind.DIRECTED if graph.is_directed() else GraphKind.UNDIRECTED
        handle = cls(adjacency, kind=kind, labels=nodes)
        if kind is GraphKind.DIRECTED and cache_transpose:
            handle.cache_transpose()
        return handle

    @classmethod
    def from_matrix(cls, matrix, kind: GraphKind = GraphKind.DIRECTED,
                    labels: Optional[Sequence[Hashable]] = None,
                    cache_transpose: bool = False) -> 'GraphHandle':
        """行列からハンドルを作成"""
        handle = cls(matrix, kind=kind, labels=labels)
        if cache_transpose:
            handle.cache_transpose()
        return handle

    @property
    def pattern_is_symmetric(self) -> bool:
        """隣接行列の構造が対称かどうか（初回参照時に計算してキャッシュ）"""
        if self._symmetric is None:
            a = self._pattern.astype(np.int8)
            self._symmetric = (a - a.T).count_nonzero() == 0
        return self._symmetric

    def cache_transpose(self) -> sp.csr_array:
        """転置行列を計算してキャッシュ"""
        if self._transpose is None:
            self._transpose = sp.csr_array(self._pattern.T)
        return self._transpose

    def adjacency_pattern(self) -> sp.csr_array:
        """隣接行列の構造を返す"""
        return self._pattern

    def transpose_pattern(self) -> sp.csr_array:
        """
        転置行列の構造を返す

        無向グラフまたは構造が対称なグラフでは隣接行列そのものを返す。
        """
        if self.kind is GraphKind.UNDIRECTED or self.pattern_is_symmetric:
            return self._pattern
        if self._transpose is None:
            raise InvalidGraph("有向グラフには転置行列のキャッシュが必要です（cache_transpose() を呼び出してください）")
        return self._transpose

    def vertex_count(self) -> int:
        return self._pattern.shape[0]

    def edge_count(self) -> int:
        """格納されている辺の数（無向グラフでは両方向を数える）"""
        return int(self._pattern.nnz)

    def out_degree(self) -> np.ndarray:
        return np.diff(self._pattern.indptr)

    @property
    def is_directed(self) -> bool:
        return self.kind is GraphKind.DIRECTED

    def index_of(self, label: Hashable) -> int:
        """ノードラベルから頂点IDを取得"""
        try:
            return self._index[label]
        except KeyError:
            raise InvalidArgument(f"ノード '{label}' がグラフに存在しません") from None

    def label_of(self, vertex: int) -> Hashable:
        return self.labels[vertex]
