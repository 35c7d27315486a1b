"""
設定ファイルに基づいて中心性計算を管理するクラス
"""

import networkx as nx
import yaml
import os
from typing import Dict, Optional, Union
import logging

from ..graph import GraphHandle
from .betweenness import BetweennessCentrality

logger = logging.getLogger(__name__)


class CentralityCalculator:
    """設定ファイルから媒介中心性の計算を構成・管理するクラス"""

    def __init__(self, config_path: Optional[str] = None):
        """
        初期化

        Args:
            config_path: 設定ファイルのパス
        """
        if config_path is None:
            config_path = os.path.join(
                os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(__file__)))),
                'config',
                'config.yaml'
            )

        self.config = self._load_config(config_path)
        self._initialize_calculators()

    def _load_config(self, config_path: str) -> Dict:
        """設定ファイルを読み込む"""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f) or {}
            return config.get('centrality', {}) or {}
        except Exception as e:
            logger.warning(f"設定ファイルの読み込みに失敗しました: {e}。デフォルト設定を使用します。")
            return {}

    def _initialize_calculators(self):
        """中心性計算クラスを初期化"""
        betweenness_config = self.config.get('betweenness', {}) or {}

        self.betweenness = BetweennessCentrality(
            normalized=betweenness_config.get('normalized', False),
            k=betweenness_config.get('k'),
            strategy=betweenness_config.get('strategy', 'degree'),
            seed=betweenness_config.get('seed'),
            direction=betweenness_config.get('direction', 'auto'),
            forward_direction=betweenness_config.get('forward_direction'),
            backward_direction=betweenness_config.get('backward_direction')
        )

    def calculate_betweenness(self, graph: Union[nx.Graph, GraphHandle]) -> Dict:
        """媒介中心性を計算"""
        return self.betweenness.calculate(graph)

    def calculate_all(self, graph: Union[nx.Graph, GraphHandle]) -> Dict[str, Dict]:
        """
        設定されたすべての中心性指標を計算

        Args:
            graph: NetworkXグラフオブジェクトまたはグラフハンドル

        Returns:
            中心性指標名をキー、中心性スコア辞書を値とする辞書（失敗した指標は空の辞書）
        """
        results = {}

        try:
            logger.info("媒介中心性の計算を開始します...")
            results['betweenness'] = self.betweenness.calculate(graph)
        except Exception as e:
            logger.error(f"媒介中心性の計算に失敗しました: {e}")
            results['betweenness'] = {}

        return results
