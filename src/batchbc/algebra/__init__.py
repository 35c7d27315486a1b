"""
疎行列演算モジュール
"""

from .operations import (
    Direction,
    Representation,
    accumulate,
    count_nonzeros,
    dense_matrix,
    elementwise_combine,
    multiply_masked,
    pattern_of,
    reduce_columns,
    set_representation,
    sparse_matrix,
)

__all__ = [
    'Direction',
    'Representation',
    'accumulate',
    'count_nonzeros',
    'dense_matrix',
    'elementwise_combine',
    'multiply_masked',
    'pattern_of',
    'reduce_columns',
    'set_representation',
    'sparse_matrix',
]
