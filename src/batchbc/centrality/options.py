"""
中心性計算エンジンのオプション定義
"""

import enum
from typing import NamedTuple, Union

from ..algebra import Direction
from ..exceptions import InvalidArgument


class DirectionPolicy(enum.Enum):
    """各ステップの評価方向の決め方"""

    AUTO = "auto"
    PUSH = "push"
    PULL = "pull"

    @classmethod
    def parse(cls, value: Union[str, 'DirectionPolicy']) -> 'DirectionPolicy':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidArgument(
                f"不明な方向ポリシーです: {value!r}（auto, push, pull のいずれかを指定してください）"
            ) from None


class EngineOptions(NamedTuple):
    """前進スイープと後退スイープの方向ポリシー"""

    forward: DirectionPolicy = DirectionPolicy.AUTO
    backward: DirectionPolicy = DirectionPolicy.AUTO

    @classmethod
    def from_direction(cls, direction: Union[str, DirectionPolicy]) -> 'EngineOptions':
        policy = DirectionPolicy.parse(direction)
        return cls(forward=policy, backward=policy)


class StepRecord(NamedTuple):
    """スイープ1ステップ分の計測値"""

    phase: str
    depth: int
    nnz: int
    density: float
    direction: Direction
