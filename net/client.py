"""贪吃蛇游戏服务 HTTP 客户端

功能:
- 创建游戏 / 获取游戏状态
- 更新蛇的移动方向
- 保存得分记录
- 获取排行榜

所有请求经由 ResilientTransport 发出 (超时 + 有限重试)。
非 2xx 响应抛出 RemoteRejectionError，成功响应体无法解析时抛出
MalformedResponseError，二者都不重试。
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from game.enums import Direction
from game.exceptions import MalformedResponseError, RemoteRejectionError
from i18n import operation_name
from i18n import t as _t

from .models import DirectionRequest, ScoreRecord
from .transport import EndpointConfig, ResilientTransport

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

GameId = str | int


class GameService:
    """贪吃蛇游戏服务客户端

    由组合根创建一次并注入给使用方；实例无可变状态，可被并发调用。
    """

    def __init__(self, transport: ResilientTransport | None = None):
        self.transport = transport or ResilientTransport()

    @classmethod
    def from_endpoint(
        cls,
        endpoint: EndpointConfig,
        client: httpx.AsyncClient | None = None,
    ) -> GameService:
        return cls(ResilientTransport(endpoint, client=client))

    @property
    def endpoint(self) -> EndpointConfig:
        return self.transport.endpoint

    # ==================== 接口操作 ====================

    async def create_game(self) -> Any:
        """创建新游戏，返回值中包含游戏 ID"""
        return await self._call("create_game", "POST", "/game", body=None)

    async def get_game_state(self, game_id: GameId) -> Any:
        """获取游戏状态"""
        return await self._call("get_game_state", "GET", f"/game/{game_id}")

    async def update_direction(self, game_id: GameId, direction: Direction | str) -> Any:
        """更新蛇的方向 (发送前转为小写，不做取值校验)"""
        payload = DirectionRequest(direction=direction)
        logger.debug(f"标准化后的方向: {payload.direction}")
        return await self._call(
            "update_direction",
            "POST",
            f"/game/{game_id}/direction",
            body=payload.model_dump_json(),
        )

    async def save_score(self, game_id: GameId, player_name: str, score: int) -> Any:
        """保存游戏记录"""
        record = ScoreRecord(player_name=player_name, score=score)
        return await self._call(
            "save_score",
            "POST",
            f"/game/{game_id}/record",
            body=record.model_dump_json(by_alias=True),
        )

    async def get_leaderboard(self) -> Any:
        """获取排行榜 (顺序与条数完全由服务端决定)"""
        return await self._call("get_leaderboard", "GET", "/leaderboard")

    # ==================== 内部实现 ====================

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        body: str | None = None,
    ) -> Any:
        url = self.endpoint.url(path)
        logger.info(f"正在{operation_name(operation)}: {method} {url}")

        # 与服务端约定: 所有 POST 请求都声明 JSON 内容类型
        headers = JSON_HEADERS if method == "POST" else None
        try:
            response = await self.transport.execute(
                url, method=method, headers=headers, content=body
            )
            logger.info(
                f"{operation_name(operation)}响应状态: "
                f"{response.status_code}, {response.reason_phrase}"
            )
            return self._parse(operation, response)
        except Exception as e:
            logger.error(f"{operation_name(operation)}时发生异常: {e}")
            raise

    @staticmethod
    def _parse(operation: str, response: httpx.Response) -> Any:
        if not response.is_success:
            error_data = _parse_error_body(response)
            logger.error(f"{operation_name(operation)}错误数据: {error_data}")
            raise RemoteRejectionError(
                operation,
                response.status_code,
                response.reason_phrase,
                error_data,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                operation, response.status_code, response.text
            ) from e
        logger.debug(f"{operation_name(operation)}成功: {data}")
        return data

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> GameService:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _parse_error_body(response: httpx.Response) -> Any:
    """解析错误响应体，空响应或非 JSON 时返回空字典"""
    if not response.content:
        return {}
    try:
        return response.json()
    except (ValueError, UnicodeDecodeError):
        return {}


def describe_failure(operation: str, error: BaseException) -> str:
    """生成面向用户的失败描述 (操作名 + 状态文本及服务端说明，或异常描述)"""
    if isinstance(error, (RemoteRejectionError, MalformedResponseError)):
        return error.message
    if isinstance(error, (asyncio.TimeoutError, httpx.TimeoutException)):
        detail = _t("error.timeout")
    else:
        detail = str(error) or type(error).__name__
    return _t("error.transport", op=operation_name(operation), error=detail)


__all__ = [
    "GameService",
    "GameId",
    "JSON_HEADERS",
    "describe_failure",
]
