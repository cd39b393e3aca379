"""网络通信模块
基于 HTTP 的贪吃蛇游戏服务客户端 (超时 + 有限重试)
"""

from .client import GameService, describe_failure
from .models import DirectionRequest, GameSnapshot, ScoreRecord
from .transport import EndpointConfig, ResilientTransport, is_retryable

__all__ = [
    "EndpointConfig", "ResilientTransport", "is_retryable",
    "GameService", "describe_failure",
    "DirectionRequest", "ScoreRecord", "GameSnapshot",
]
