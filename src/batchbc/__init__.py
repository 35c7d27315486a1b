"""
バッチ型 push/pull 媒介中心性計算パッケージ
"""

from .centrality import (
    BetweennessCentrality,
    CentralityCalculator,
    DirectionPolicy,
    EngineOptions,
    compute_betweenness_centrality,
    select_sources,
)
from .exceptions import CentralityError, EngineFailure, InvalidArgument, InvalidGraph, OutOfMemory
from .graph import GraphBuilder, GraphHandle, GraphKind

__all__ = [
    'BetweennessCentrality',
    'CentralityCalculator',
    'CentralityError',
    'DirectionPolicy',
    'EngineFailure',
    'EngineOptions',
    'GraphBuilder',
    'GraphHandle',
    'GraphKind',
    'InvalidArgument',
    'InvalidGraph',
    'OutOfMemory',
    'compute_betweenness_centrality',
    'select_sources'
]
