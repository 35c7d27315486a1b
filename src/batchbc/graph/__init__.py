"""
グラフ構築モジュール
"""

from .builder import GraphBuilder
from .handle import GraphHandle, GraphKind

__all__ = [
    'GraphBuilder',
    'GraphHandle',
    'GraphKind'
]
