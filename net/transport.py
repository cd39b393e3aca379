"""带超时与重试的 HTTP 传输层

每次尝试都有独立的截止时间 (asyncio.wait_for)，超时即取消该次请求。
超时与网络故障按线性退避重试: 第 n 次重试前等待 n * backoff_step 秒。
其余异常直接抛出；重试耗尽后原样抛出最后一次的底层异常，不做包装。
本层不解释 HTTP 状态码。
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

# 可重试的失败: 截止时间到期 / 未拿到任何响应的网络故障 (含对端未响应即断开)
RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    asyncio.TimeoutError,
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


def is_retryable(exc: BaseException) -> bool:
    """判断异常是否属于可重试的传输故障"""
    return isinstance(exc, RETRYABLE_ERRORS)


@dataclass(frozen=True)
class EndpointConfig:
    """网络端点配置 (不可变，可被并发请求共享)"""

    server_url: str = "http://localhost:8080"
    api_base: str = "/api"
    timeout: float = 3.0        # 单次尝试的截止时间 (秒)
    max_retries: int = 2        # 最多重试次数，总尝试次数 = max_retries + 1
    backoff_step: float = 0.5   # 线性退避步长 (秒)

    def url(self, path: str) -> str:
        """拼接接口路径前缀"""
        return f"{self.api_base}{path}"

    def backoff_delay(self, retries_remaining: int) -> float:
        """剩余 retries_remaining 次重试时，下一次重试前的等待秒数"""
        attempts_used = max(1, self.max_retries - retries_remaining + 1)
        return attempts_used * self.backoff_step


class ResilientTransport:
    """带截止时间与有限重试的请求执行器

    职责:
    1. 为每次尝试设置独立的超时
    2. 区分可重试 / 不可重试的失败
    3. 线性退避后重试，直到成功或预算耗尽
    """

    def __init__(
        self,
        endpoint: EndpointConfig | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ):
        self.endpoint = endpoint or EndpointConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.endpoint.server_url,
            timeout=self.endpoint.timeout,
        )
        self._sleep = sleep

    async def execute(
        self,
        target: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
        retries_remaining: int | None = None,
    ) -> httpx.Response:
        """执行一次逻辑请求，返回原始响应

        Args:
            target: 请求路径 (相对 server_url) 或完整 URL
            method: HTTP 方法，默认 GET
            headers: 请求头
            content: 已编码的请求体
            retries_remaining: 剩余重试次数，默认取配置的 max_retries

        Raises:
            asyncio.TimeoutError / httpx.TimeoutException: 重试耗尽后仍超时
            httpx.NetworkError / httpx.RemoteProtocolError: 重试耗尽后仍无法连接或对端断开
            Exception: 其他不可重试的异常，立即抛出
        """
        if retries_remaining is None:
            retries_remaining = self.endpoint.max_retries

        while True:
            request = self._client.build_request(
                method, target, headers=headers, content=content
            )
            try:
                return await asyncio.wait_for(
                    self._client.send(request), timeout=self.endpoint.timeout
                )
            except RETRYABLE_ERRORS as e:
                if retries_remaining <= 0:
                    logger.error(
                        f"请求失败，已无剩余重试: {method} {target} ({type(e).__name__}: {e})"
                    )
                    raise
                delay = self.endpoint.backoff_delay(retries_remaining)
                logger.warning(
                    f"请求失败，{retries_remaining}次重试中... {method} {target} "
                    f"({type(e).__name__}), {delay:.1f}s 后重试"
                )

            await self._sleep(delay)
            retries_remaining -= 1

    async def aclose(self) -> None:
        """关闭自行创建的 HTTP 客户端"""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> ResilientTransport:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
