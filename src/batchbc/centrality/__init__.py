"""
中心性計算モジュール
"""

from .accumulator import backward_sweep, choose_backward_direction, dependency_ratios, finalize_centrality
from .betweenness import BetweennessCentrality
from .calculator import CentralityCalculator
from .engine import compute_betweenness_centrality
from .frontier import ForwardResult, choose_forward_direction, forward_sweep
from .options import DirectionPolicy, EngineOptions, StepRecord
from .sources import select_sources

__all__ = [
    'BetweennessCentrality',
    'CentralityCalculator',
    'DirectionPolicy',
    'EngineOptions',
    'ForwardResult',
    'StepRecord',
    'backward_sweep',
    'choose_backward_direction',
    'choose_forward_direction',
    'compute_betweenness_centrality',
    'dependency_ratios',
    'finalize_centrality',
    'forward_sweep',
    'select_sources'
]
