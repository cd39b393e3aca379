"""客户端配置中心 (SSOT - 单一事实来源)

所有可配置的客户端参数应在此定义，支持从环境变量覆盖。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from .enums import Direction
from .exceptions import ConfigurationError


def _get_env_float(key: str, default: float) -> float:
    """从环境变量获取浮点数配置"""
    value = os.environ.get(key)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            pass
    return default


def _get_env_int(key: str, default: int) -> int:
    """从环境变量获取整数配置"""
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def _get_env_bool(key: str, default: bool) -> bool:
    """从环境变量获取布尔配置"""
    value = os.environ.get(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    elif value in ("false", "0", "no", "off"):
        return False
    return default


# 按键 → 方向 (键名统一小写)
DEFAULT_KEY_MAPPING: dict[str, str] = {
    "w": Direction.UP.value,
    "s": Direction.DOWN.value,
    "a": Direction.LEFT.value,
    "d": Direction.RIGHT.value,
    "keyw": Direction.UP.value,
    "keys": Direction.DOWN.value,
    "keya": Direction.LEFT.value,
    "keyd": Direction.RIGHT.value,
    "arrowup": Direction.UP.value,
    "arrowdown": Direction.DOWN.value,
    "arrowleft": Direction.LEFT.value,
    "arrowright": Direction.RIGHT.value,
}


@dataclass(frozen=True)
class ClientConfig:
    """客户端配置类 (不可变)

    所有配置项支持通过环境变量覆盖：
    - SNAKE_SERVER_URL: 游戏服务地址
    - SNAKE_API_BASE: 接口路径前缀
    - SNAKE_REQUEST_TIMEOUT: 单次请求超时秒数
    - SNAKE_MAX_RETRIES: 最大重试次数
    - SNAKE_BACKOFF_STEP: 退避步长秒数
    - SNAKE_POLL_INTERVAL: 状态轮询间隔秒数
    """
    # ==================== 服务端点 ====================
    server_url: str = field(
        default_factory=lambda: os.environ.get("SNAKE_SERVER_URL", "http://localhost:8080")
    )
    api_base: str = field(
        default_factory=lambda: os.environ.get("SNAKE_API_BASE", "/api")
    )

    # ==================== 超时与重试 ====================
    request_timeout: float = field(
        default_factory=lambda: _get_env_float("SNAKE_REQUEST_TIMEOUT", 3.0)
    )
    max_retries: int = field(
        default_factory=lambda: _get_env_int("SNAKE_MAX_RETRIES", 2)
    )
    backoff_step: float = field(
        default_factory=lambda: _get_env_float("SNAKE_BACKOFF_STEP", 0.5)
    )

    # ==================== 游戏界面 ====================
    poll_interval: float = field(
        default_factory=lambda: _get_env_float("SNAKE_POLL_INTERVAL", 0.1)
    )
    board_width: int = field(
        default_factory=lambda: _get_env_int("SNAKE_BOARD_WIDTH", 15)
    )
    board_height: int = field(
        default_factory=lambda: _get_env_int("SNAKE_BOARD_HEIGHT", 15)
    )
    key_mapping: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_KEY_MAPPING)
    )

    # ==================== 日志与调试 ====================
    log_level: str = field(
        default_factory=lambda: os.environ.get("SNAKE_LOG_LEVEL", "INFO")
    )
    debug_mode: bool = field(
        default_factory=lambda: _get_env_bool("SNAKE_DEBUG", False)
    )

    @classmethod
    def from_env(cls) -> ClientConfig:
        """从环境变量创建配置实例"""
        return cls()

    def get(self, key: str, default: Any = None) -> Any:
        """字典风格的访问方法"""
        return getattr(self, key, default)

    def validate(self) -> list[str]:
        """校验配置，返回错误描述列表（为空表示有效）"""
        errors: list[str] = []
        if not self.server_url.startswith(("http://", "https://")):
            errors.append(f"server_url must be an http(s) URL, got {self.server_url!r}")
        if self.api_base and not self.api_base.startswith("/"):
            errors.append(f"api_base must start with '/', got {self.api_base!r}")
        if self.request_timeout <= 0:
            errors.append(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.max_retries < 0:
            errors.append(f"max_retries must be >= 0, got {self.max_retries}")
        if self.backoff_step < 0:
            errors.append(f"backoff_step must be >= 0, got {self.backoff_step}")
        if self.poll_interval <= 0:
            errors.append(f"poll_interval must be > 0, got {self.poll_interval}")
        if self.board_width < 1:
            errors.append(f"board_width must be >= 1, got {self.board_width}")
        if self.board_height < 1:
            errors.append(f"board_height must be >= 1, got {self.board_height}")
        return errors

    def ensure_valid(self) -> ClientConfig:
        """校验配置，无效时抛出 ConfigurationError"""
        errors = self.validate()
        if errors:
            raise ConfigurationError(errors=errors)
        return self

    def endpoint(self):
        """派生网络层使用的 EndpointConfig"""
        from net.transport import EndpointConfig

        return EndpointConfig(
            server_url=self.server_url,
            api_base=self.api_base.rstrip("/"),
            timeout=self.request_timeout,
            max_retries=self.max_retries,
            backoff_step=self.backoff_step,
        )

    def direction_for_key(self, key: str) -> str | None:
        """按键名查找方向，未映射时返回 None"""
        return self.key_mapping.get(key.strip().lower())


# 全局配置单例
_config: ClientConfig | None = None


def get_config() -> ClientConfig:
    """获取全局配置实例（懒加载）"""
    global _config
    if _config is None:
        _config = ClientConfig.from_env()
    return _config


def reset_config() -> None:
    """重置配置（用于测试）"""
    global _config
    _config = None
