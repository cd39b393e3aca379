"""测试公共夹具: 基于 httpx.MockTransport 的假游戏服务"""

from __future__ import annotations

import itertools
import json
import logging
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from i18n import get_locale, set_locale
from net.client import GameService
from net.transport import EndpointConfig, ResilientTransport

SERVER_URL = "http://snake.test"


@pytest.fixture(autouse=True)
def _reset_locale():
    """每个测试结束后恢复默认语言"""
    original = get_locale()
    set_locale("zh_CN")
    yield
    set_locale(original)


class FakeSnakeServer:
    """内存中的贪吃蛇服务，按真实服务端的路由与响应格式应答"""

    def __init__(self, leaderboard: list[dict] | None = None):
        self.games: dict[str, dict] = {}
        self.records: list[dict] = []
        self.leaderboard = leaderboard if leaderboard is not None else []
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    def _new_game(self) -> dict:
        game_id = f"game-{next(self._ids)}"
        game = {
            "id": game_id,
            "snake": {"body": [{"x": 7, "y": 7}, {"x": 6, "y": 7}, {"x": 5, "y": 7}], "direction": 3},
            "food": {"position": {"x": 2, "y": 3}},
            "walls": [],
            "width": 15,
            "height": 15,
            "status": "running",
            "score": 0,
            "foodCount": 0,
            "time": 0,
        }
        self.games[game_id] = game
        return game

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        if parts[:1] != ["api"]:
            return httpx.Response(404, json={"error": "not found"})
        parts = parts[1:]

        if parts == ["game"] and request.method == "POST":
            return httpx.Response(200, json=self._new_game())
        if parts == ["leaderboard"] and request.method == "GET":
            return httpx.Response(200, json=self.leaderboard)
        if len(parts) >= 2 and parts[0] == "game":
            game = self.games.get(parts[1])
            if game is None:
                return httpx.Response(404, json={"error": "游戏不存在"})
            if len(parts) == 2 and request.method == "GET":
                return httpx.Response(200, json=game)
            body = json.loads(request.content or b"{}")
            if parts[2:] == ["direction"] and request.method == "POST":
                if body.get("direction") not in ("up", "down", "left", "right"):
                    return httpx.Response(400, json={"error": "无效的方向"})
                return httpx.Response(200, json={"success": "方向更新成功"})
            if parts[2:] == ["record"] and request.method == "POST":
                self.records.append(body)
                return httpx.Response(200, json={"success": "记录保存成功"})
        return httpx.Response(405)


@pytest.fixture
def fake_server():
    return FakeSnakeServer()


@pytest_asyncio.fixture
async def service_factory():
    """用给定的请求处理函数构造 GameService，返回 (service, sleep 替身)

    测试结束后关闭所有构造出的 HTTP 客户端。
    """
    clients: list[httpx.AsyncClient] = []

    def build(handler, *, timeout: float = 0.05, max_retries: int = 2):
        endpoint = EndpointConfig(server_url=SERVER_URL, timeout=timeout, max_retries=max_retries)
        client = httpx.AsyncClient(base_url=SERVER_URL, transport=httpx.MockTransport(handler))
        clients.append(client)
        sleep = AsyncMock()
        return GameService(ResilientTransport(endpoint, client=client, sleep=sleep)), sleep

    yield build
    for client in clients:
        await client.aclose()


@pytest.fixture
def clean_logging():
    """摘除客户端的日志处理器，避免跨测试残留文件句柄"""

    def detach():
        root = logging.getLogger()
        for handler in list(root.handlers):
            if handler.name in ("snake_client_file", "snake_client_console"):
                root.removeHandler(handler)
                handler.close()

    detach()
    yield logging.getLogger()
    detach()
