"""GameService / ResilientTransport 的性质测试（Property-based）。

核心不变量：
1. 任意大小写的方向，发送的 direction 字段恰为其小写形式
2. 前 k 次 (k ≤ max_retries) 网络失败后成功：恰好 k 次退避，时长为 0.5, 1.0, ...
3. 始终失败：总尝试次数 = max_retries + 1
4. 排行榜条数与顺序与服务端完全一致
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock

_project_root = str(Path(__file__).resolve().parents[2])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from net.client import GameService
from net.transport import EndpointConfig, ResilientTransport

# ---------------------------------------------------------------------------
# 辅助
# ---------------------------------------------------------------------------

SERVER_URL = "http://snake.test"


def _run(handler, operation, *, max_retries: int = 2, sleep=None):
    """在新的事件循环中对假服务执行一次 operation(service)，结束后关闭 HTTP 客户端"""
    endpoint = EndpointConfig(server_url=SERVER_URL, max_retries=max_retries)

    async def main():
        async with httpx.AsyncClient(
            base_url=SERVER_URL, transport=httpx.MockTransport(handler)
        ) as client:
            service = GameService(ResilientTransport(endpoint, client=client, sleep=sleep or AsyncMock()))
            return await operation(service)

    return asyncio.run(main())


def _flaky(failures: int):
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) <= failures:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json={"id": "g1"})

    return handler, attempts


@st.composite
def mixed_case_direction(draw):
    word = draw(st.sampled_from(["up", "down", "left", "right"]))
    flags = draw(st.lists(st.booleans(), min_size=len(word), max_size=len(word)))
    return "".join(c.upper() if f else c for c, f in zip(word, flags))


# ---------------------------------------------------------------------------
# 性质
# ---------------------------------------------------------------------------


@given(direction=mixed_case_direction())
@settings(max_examples=60, deadline=None)
def test_direction_is_sent_lowercase(direction):
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={})

    _run(handler, lambda service: service.update_direction("g1", direction))
    assert seen == [{"direction": direction.lower()}]


@given(text=st.text(max_size=20))
@settings(max_examples=60, deadline=None)
def test_any_direction_text_is_forwarded_lowercased(text):
    seen = []

    def handler(request):
        seen.append(json.loads(request.content)["direction"])
        return httpx.Response(200, json={})

    _run(handler, lambda service: service.update_direction("g1", text))
    assert seen == [text.lower()]


@given(data=st.data(), max_retries=st.integers(min_value=0, max_value=5))
@settings(max_examples=40, deadline=None)
def test_recovery_backoff_schedule(data, max_retries):
    failures = data.draw(st.integers(min_value=0, max_value=max_retries))
    handler, attempts = _flaky(failures)
    sleep = AsyncMock()

    result = _run(
        handler, lambda service: service.get_game_state("g1"), max_retries=max_retries, sleep=sleep
    )
    assert result == {"id": "g1"}
    assert len(attempts) == failures + 1
    assert [c.args[0] for c in sleep.await_args_list] == [
        pytest.approx(0.5 * n) for n in range(1, failures + 1)
    ]


@given(max_retries=st.integers(min_value=0, max_value=5))
@settings(max_examples=20, deadline=None)
def test_attempts_bounded_by_budget(max_retries):
    handler, attempts = _flaky(10_000)
    sleep = AsyncMock()

    with pytest.raises(httpx.ConnectError):
        _run(handler, lambda service: service.create_game(), max_retries=max_retries, sleep=sleep)
    assert len(attempts) == max_retries + 1
    assert sleep.await_count == max_retries


@given(records=st.lists(
    st.fixed_dictionaries({
        "score": st.integers(min_value=0, max_value=10_000),
        "time_played": st.integers(min_value=0, max_value=3600),
        "food_count": st.integers(min_value=0, max_value=500),
    }),
    max_size=15,
))
@settings(max_examples=40, deadline=None)
def test_leaderboard_mirrors_server(records):
    board = _run(
        lambda request: httpx.Response(200, json=records),
        lambda service: service.get_leaderboard(),
    )
    assert board == records
