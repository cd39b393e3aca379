# -*- coding: utf-8 -*-
"""
贪吃蛇客户端公共模块
包含客户端配置、方向枚举和异常类型
"""

from .config import ClientConfig, get_config, reset_config
from .enums import Direction, normalize_direction
from .exceptions import (
    ClientError, ConfigurationError, MalformedResponseError,
    RemoteRejectionError,
)

__all__ = [
    # 配置
    'ClientConfig', 'get_config', 'reset_config',
    # 方向
    'Direction', 'normalize_direction',
    # 异常
    'ClientError', 'ConfigurationError', 'MalformedResponseError',
    'RemoteRejectionError',
]
