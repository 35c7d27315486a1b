"""
疎行列演算プリミティブモジュール

numpy の密配列と scipy.sparse の CSR 配列の上で、マスク付き行列積、要素ごとの演算、
列方向の縮約を提供する。値が 0 の要素は「存在しない」要素として扱う。
"""

import enum
import functools
import logging
from typing import Callable, Tuple, Union

import numpy as np
import scipy.sparse as sp

from ..exceptions import CentralityError, EngineFailure, OutOfMemory

logger = logging.getLogger(__name__)

Matrix = Union[np.ndarray, sp.csr_array]


class Direction(enum.Enum):
    """行列積の評価方向"""

    PUSH = "push"
    PULL = "pull"


class Representation(enum.Enum):
    """行列の格納形式のヒント"""

    SPARSE = "sparse"
    BITMAP = "bitmap"
    FULL = "full"


def _engine_operation(func):
    """numpy / scipy の例外をエンジンのエラーに変換するデコレータ"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CentralityError:
            raise
        except MemoryError as e:
            raise OutOfMemory(f"{func.__name__}: 行列の確保に失敗しました") from e
        except (ValueError, TypeError, IndexError, ArithmeticError) as e:
            raise EngineFailure(func.__name__, str(e)) from e

    return wrapper


def _as_sparse(a) -> sp.csr_array:
    if isinstance(a, sp.csr_array):
        return a
    return sp.csr_array(a)


def _ones_pattern(b) -> sp.csr_array:
    """格納されている要素の値をすべて 1.0 にした CSR 行列"""
    b = _as_sparse(b)
    return sp.csr_array((np.ones(b.nnz), b.indices, b.indptr), shape=b.shape)


def _as_dense(a) -> np.ndarray:
    if sp.issparse(a):
        return a.toarray()
    return np.asarray(a)


def _entries(a) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """存在する要素の (行, 列, 値) を返す"""
    if sp.issparse(a):
        coo = sp.coo_array(a)
        rows = np.asarray(coo.row, dtype=np.int64)
        cols = np.asarray(coo.col, dtype=np.int64)
        values = np.asarray(coo.data)
    else:
        a = np.asarray(a)
        rows, cols = np.nonzero(a)
        values = a[rows, cols]
    keep = values != 0
    return rows[keep], cols[keep], values[keep]


def _values_at(a, rows: np.ndarray, cols: np.ndarray) -> np.ndarray:
    return _as_dense(a)[rows, cols]


def _check_shape(a, shape: Tuple[int, int]):
    if tuple(a.shape) != tuple(shape):
        raise ValueError(f"行列の形状が一致しません: {tuple(a.shape)} != {tuple(shape)}")


def _mask_array(mask, shape: Tuple[int, int]) -> np.ndarray:
    """マスクの構造をブール型の密配列に展開"""
    _check_shape(mask, shape)
    if sp.issparse(mask):
        dense = np.zeros(shape, dtype=bool)
        rows, cols, _ = _entries(mask)
        dense[rows, cols] = True
        return dense
    return np.asarray(mask) != 0


def _mask_contains(mask, shape: Tuple[int, int], rows: np.ndarray, cols: np.ndarray) -> np.ndarray:
    """(rows, cols) の各位置がマスクの構造に含まれるかどうか"""
    _check_shape(mask, shape)
    if sp.issparse(mask):
        # 疎なマスクは密配列に展開せず、線形インデックスで照合する
        mask_rows, mask_cols, _ = _entries(mask)
        ncols = shape[1]
        return np.isin(rows * ncols + cols, mask_rows * ncols + mask_cols)
    return np.asarray(mask)[rows, cols] != 0


def _apply_mask(c: Matrix, mask, complement: bool) -> Matrix:
    if mask is None:
        return c
    if sp.issparse(c):
        rows, cols, values = _entries(c)
        keep = _mask_contains(mask, c.shape, rows, cols)
        if complement:
            keep = ~keep
        return sp.csr_array((values[keep], (rows[keep], cols[keep])), shape=c.shape)
    allowed = _mask_array(mask, c.shape)
    if complement:
        allowed = ~allowed
    return np.where(allowed, c, 0.0)


@_engine_operation
def dense_matrix(nrows: int, ncols: int, fill: float = 0.0) -> np.ndarray:
    """全要素を fill で埋めた密行列を確保"""
    return np.full((nrows, ncols), fill, dtype=np.float64)


@_engine_operation
def sparse_matrix(rows, cols, values, shape: Tuple[int, int]) -> sp.csr_array:
    """座標形式の要素から CSR 行列を構築"""
    return sp.csr_array(
        (np.asarray(values, dtype=np.float64), (np.asarray(rows), np.asarray(cols))),
        shape=shape,
    )


@_engine_operation
def multiply_masked(a: Matrix, b, mask=None, complement: bool = False,
                    direction: Direction = Direction.PUSH) -> Matrix:
    """
    マスク付き行列積 C<M> = A (plus, first) B を計算

    乗算には左オペランドの値をそのまま使い、共通次元方向に加算する。
    B は構造のみが参照され、値は無視される。結果はマスク内の位置だけを保持する
    （replace セマンティクス）。

    Args:
        a: 左オペランド
        b: PUSH の場合は右オペランド B、PULL の場合は B の転置行列
        mask: 書き込みを許可する位置の構造マスク（None の場合は制限なし）
        complement: True の場合はマスクに存在しない位置にのみ書き込む
        direction: 評価方向。結果には影響せず、性能のみが変わる

    Returns:
        PUSH の場合は CSR 行列、PULL の場合は密行列
    """
    if direction is Direction.PUSH:
        # 左オペランドの各要素から出辺方向へ展開する
        product = _as_sparse(a) @ _ones_pattern(b)
    else:
        # 出力の各列が入辺側の要素を集約する
        product = (_ones_pattern(b) @ _as_dense(a).T).T
    return _apply_mask(product, mask, complement)


@_engine_operation
def elementwise_combine(combine_op: Callable, a: Matrix, b: Matrix, mask=None) -> sp.csr_array:
    """
    要素ごとの演算 C<M> = A .op B を計算

    A と B の両方に存在する位置（マスクがある場合はさらにマスク内の位置）だけが
    結果に含まれる。

    Args:
        combine_op: 要素ごとの二項演算（np.divide, np.multiply など）
        a: 左オペランド
        b: 右オペランド
        mask: 構造マスク

    Returns:
        CSR 行列
    """
    _check_shape(b, a.shape)
    if mask is not None:
        _check_shape(mask, a.shape)
        rows, cols, _ = _entries(mask)
        a_values = _values_at(a, rows, cols)
    else:
        rows, cols, a_values = _entries(a)
    b_values = _values_at(b, rows, cols)
    keep = (a_values != 0) & (b_values != 0)
    values = combine_op(a_values[keep], b_values[keep])
    return sp.csr_array((values, (rows[keep], cols[keep])), shape=a.shape)


@_engine_operation
def accumulate(dest: np.ndarray, accum_op: Callable, a: Matrix, mask=None) -> np.ndarray:
    """
    dest<M> accum= A をその場で計算

    A に存在する位置だけが更新される。
    """
    if not isinstance(dest, np.ndarray):
        raise TypeError("累積先は密行列である必要があります")
    _check_shape(a, dest.shape)
    rows, cols, values = _entries(a)
    if mask is not None:
        keep = _mask_contains(mask, dest.shape, rows, cols)
        rows, cols, values = rows[keep], cols[keep], values[keep]
    dest[rows, cols] = accum_op(dest[rows, cols], values)
    return dest


@_engine_operation
def reduce_columns(dest: np.ndarray, accum_op: Callable, a: Matrix,
                   monoid: Callable = np.add) -> np.ndarray:
    """各列を monoid で縮約し、結果を dest に累積"""
    if a.shape[1] != dest.shape[0]:
        raise ValueError(f"ベクトルの長さが一致しません: {dest.shape[0]} != {a.shape[1]}")
    reduced = monoid.reduce(_as_dense(a), axis=0)
    dest[:] = accum_op(dest, reduced)
    return dest


@_engine_operation
def pattern_of(a: Matrix) -> sp.csr_array:
    """行列の構造（値を持たないブール行列）を抽出"""
    rows, cols, _ = _entries(a)
    return sp.csr_array((np.ones(len(rows), dtype=bool), (rows, cols)), shape=a.shape)


@_engine_operation
def set_representation(a: Matrix, hint: Representation) -> Matrix:
    """
    格納形式を切り替える

    SPARSE は CSR、BITMAP と FULL は密配列に変換する。値と構造は変わらない。
    """
    if hint is Representation.SPARSE:
        return _as_sparse(a)
    return _as_dense(a)


def count_nonzeros(a: Matrix) -> int:
    """存在する要素数を返す"""
    if sp.issparse(a):
        return int(a.count_nonzero())
    return int(np.count_nonzero(a))
