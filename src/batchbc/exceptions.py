"""
例外定義モジュール
"""


class CentralityError(Exception):
    """中心性計算で発生するすべてのエラーの基底クラス"""


class InvalidArgument(CentralityError, ValueError):
    """ソース頂点リストなど、引数が不正な場合のエラー"""


class InvalidGraph(CentralityError):
    """隣接行列が正方でない、必要な転置行列がないなど、グラフが不正な場合のエラー"""


class OutOfMemory(CentralityError, MemoryError):
    """行列の確保に失敗した場合のエラー"""


class EngineFailure(CentralityError):
    """疎行列演算エンジンでエラーが発生した場合のエラー"""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")
