"""
分析モジュール
"""

from .report import CentralityReport

__all__ = ['CentralityReport']
