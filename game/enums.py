"""方向枚举与规范化

服务端只接受小写的方向字符串；客户端在发送前统一转为小写，
但不校验取值是否在枚举范围内，非法方向交由服务端拒绝。
"""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """蛇的移动方向"""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


def normalize_direction(direction: Direction | str) -> str:
    """返回方向的小写规范形式

    >>> normalize_direction("Up")
    'up'
    >>> normalize_direction(Direction.LEFT)
    'left'
    """
    if isinstance(direction, Direction):
        return direction.value
    return str(direction).lower()
