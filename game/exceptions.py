"""客户端异常模块
定义与贪吃蛇游戏服务通信时的各类异常，提供明确的错误类型和信息

超时与网络故障不在此定义：重试耗尽后原样抛出底层的
``asyncio.TimeoutError`` / ``httpx.TimeoutException`` / ``httpx.NetworkError``
/ ``httpx.RemoteProtocolError``。
"""

from __future__ import annotations

from typing import Any

from i18n import operation_name
from i18n import t as _t


class ClientError(Exception):
    """客户端异常基类

    所有由本客户端主动抛出的异常都继承此类，
    提供统一的异常处理接口。
    """

    def __init__(self, message: str, details: dict | None = None):
        """初始化客户端异常

        Args:
            message: 错误消息
            details: 额外的错误详情（可选）
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# ==================== 服务响应相关异常 ====================


def _payload_reason(payload: Any) -> str:
    """取出错误响应体中服务端给出的说明 (error / message 字段)"""
    if not isinstance(payload, dict):
        return ""
    for key in ("error", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


class RemoteRejectionError(ClientError):
    """服务端拒绝异常

    服务端返回了非 2xx 状态码时抛出，不会重试
    """

    def __init__(
        self,
        operation: str,
        status_code: int,
        status_text: str = "",
        payload: Any = None,
    ):
        reason = _payload_reason(payload)
        message = _t(
            "error.remote_rejection_detail" if reason else "error.remote_rejection",
            op=operation_name(operation),
            status=status_text or status_code,
            detail=reason,
        )
        details: dict[str, Any] = {"status_code": status_code}
        if payload:
            details["payload"] = payload
        super().__init__(message, details)
        self.operation = operation
        self.status_code = status_code
        self.status_text = status_text
        self.payload = payload if payload is not None else {}


class MalformedResponseError(ClientError, ValueError):
    """响应格式异常

    服务端返回成功状态码但响应体不是合法 JSON 时抛出，不会重试
    """

    def __init__(self, operation: str, status_code: int, body: str = ""):
        message = _t("error.malformed_response", op=operation_name(operation))
        details: dict[str, Any] = {"status_code": status_code}
        if body:
            details["body"] = body[:200]
        super().__init__(message, details)
        self.operation = operation
        self.status_code = status_code
        self.body = body


# ==================== 配置相关异常 ====================


class ConfigurationError(ClientError):
    """配置错误异常

    当客户端配置有问题时抛出
    """

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        if message is None:
            message = _t("error.configuration")
        details = {}
        if errors:
            details["errors"] = errors
        super().__init__(message, details)
        self.errors = errors or []
