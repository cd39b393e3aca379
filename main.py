# -*- coding: utf-8 -*-
"""
贪吃蛇 - 游戏服务命令行客户端
主程序入口 (组合根)

使用方法:
    python main.py new
    python main.py state <game_id>
    python main.py turn <game_id> up|down|left|right|w|a|s|d
    python main.py save <game_id> <name> <score>
    python main.py leaderboard
    python main.py watch <game_id> [--ticks N]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import httpx
from rich.box import ROUNDED
from rich.console import Console
from pydantic import ValidationError
from rich.table import Table

from game.config import ClientConfig
from game.exceptions import ClientError, ConfigurationError, MalformedResponseError
from i18n import set_locale
from i18n import t as _t
from logging_config import setup_logging
from net.client import GameService, describe_failure
from net.models import GameSnapshot

logger = logging.getLogger(__name__)

# 命令 → 对应的接口操作 (用于失败描述)
COMMAND_OPERATIONS = {
    "new": "create_game",
    "state": "get_game_state",
    "watch": "get_game_state",
    "turn": "update_direction",
    "save": "save_score",
    "leaderboard": "get_leaderboard",
}

# 命令行可捕获并友好提示的失败类型
HANDLED_ERRORS = (ClientError, httpx.HTTPError, asyncio.TimeoutError)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=_t("cli.description"))
    parser.add_argument("--server", default=None, help="游戏服务地址，覆盖 SNAKE_SERVER_URL")
    parser.add_argument("--lang", default="zh_CN", choices=["zh_CN", "en_US"], help="界面语言")
    parser.add_argument("--verbose", "-v", action="store_true", help="在终端输出日志")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("new", help="创建新游戏")

    state = sub.add_parser("state", help="查看游戏状态")
    state.add_argument("game_id")

    turn = sub.add_parser("turn", help="改变方向 (方向名或按键)")
    turn.add_argument("game_id")
    turn.add_argument("direction")

    save = sub.add_parser("save", help="保存得分")
    save.add_argument("game_id")
    save.add_argument("player_name")
    save.add_argument("score", type=int)

    sub.add_parser("leaderboard", help="查看排行榜")

    watch = sub.add_parser("watch", help="轮询游戏状态直到结束")
    watch.add_argument("game_id")
    watch.add_argument("--ticks", type=int, default=100, help="最多轮询次数")
    return parser


def build_service(config: ClientConfig, client: httpx.AsyncClient | None = None) -> GameService:
    """按配置构造唯一的 GameService 实例"""
    return GameService.from_endpoint(config.endpoint(), client=client)


def to_snapshot(operation: str, data: Any) -> GameSnapshot:
    """把游戏状态响应转为快照，不是游戏对象时视为响应格式异常"""
    body = json.dumps(data, ensure_ascii=False, default=str)
    if not isinstance(data, dict):
        raise MalformedResponseError(operation, 200, body)
    try:
        return GameSnapshot.from_payload(data)
    except ValidationError as e:
        raise MalformedResponseError(operation, 200, body) from e


# ==================== 渲染 ====================


def render_state(snapshot: GameSnapshot) -> Table:
    table = Table(box=ROUNDED, show_header=False, title=_t("cli.state.title", game_id=snapshot.id))
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row(_t("cli.state.status"), snapshot.status)
    table.add_row(_t("cli.state.score"), str(snapshot.score))
    table.add_row(_t("cli.state.length"), str(snapshot.length))
    table.add_row(_t("cli.state.board"), f"{snapshot.width} x {snapshot.height}")
    return table


def render_leaderboard(records: list[dict[str, Any]]) -> Table:
    """按服务端给出的顺序渲染排行榜"""
    table = Table(box=ROUNDED, title=_t("cli.leaderboard.title"))
    table.add_column(_t("cli.leaderboard.rank"), justify="right")
    table.add_column(_t("cli.leaderboard.score"), justify="right", style="bold yellow")
    table.add_column(_t("cli.leaderboard.time"), justify="right")
    table.add_column(_t("cli.leaderboard.food"), justify="right")
    table.add_column(_t("cli.leaderboard.date"))
    for rank, record in enumerate(records, start=1):
        table.add_row(
            str(rank),
            str(record.get("score", "")),
            str(record.get("time_played", "")),
            str(record.get("food_count", "")),
            str(record.get("created_at", "")),
        )
    return table


# ==================== 命令 ====================


async def run_command(
    args: argparse.Namespace,
    service: GameService,
    config: ClientConfig,
    console: Console,
) -> int:
    """执行单个子命令，返回进程退出码"""
    command = args.command

    if command == "new":
        snapshot = to_snapshot("create_game", await service.create_game())
        console.print(_t("cli.game_created", game_id=snapshot.id))
        console.print(render_state(snapshot))

    elif command == "state":
        snapshot = to_snapshot("get_game_state", await service.get_game_state(args.game_id))
        console.print(render_state(snapshot))

    elif command == "turn":
        direction = config.direction_for_key(args.direction) or args.direction
        await service.update_direction(args.game_id, direction)
        console.print(_t("cli.direction_updated", direction=direction.lower()))

    elif command == "save":
        await service.save_score(args.game_id, args.player_name, args.score)
        console.print(_t("cli.score_saved", name=args.player_name, score=args.score))

    elif command == "leaderboard":
        records = await service.get_leaderboard() or []
        if not records:
            console.print(_t("cli.no_records"))
        else:
            console.print(render_leaderboard(records))

    elif command == "watch":
        await watch_game(args.game_id, args.ticks, service, config, console)

    return 0


async def watch_game(
    game_id: str,
    ticks: int,
    service: GameService,
    config: ClientConfig,
    console: Console,
) -> GameSnapshot | None:
    """按 poll_interval 轮询状态，游戏结束或次数用尽时返回最后一次快照"""
    snapshot = None
    for _ in range(ticks):
        snapshot = to_snapshot("get_game_state", await service.get_game_state(game_id))
        console.print(render_state(snapshot))
        if snapshot.is_over:
            console.print(_t("cli.game_over", score=snapshot.score))
            break
        await asyncio.sleep(config.poll_interval)
    return snapshot


async def _run(args: argparse.Namespace, config: ClientConfig, console: Console) -> int:
    async with build_service(config) as service:
        try:
            return await run_command(args, service, config, console)
        except HANDLED_ERRORS as e:
            logger.error(f"命令 {args.command} 失败: {e}")
            console.print(f"[red]{describe_failure(COMMAND_OPERATIONS[args.command], e)}[/red]")
            return 1


def main(argv: list[str] | None = None) -> int:
    """程序入口"""
    args = build_parser().parse_args(argv)
    set_locale(args.lang)

    config = ClientConfig.from_env()
    if args.server:
        config = ClientConfig(server_url=args.server)
    setup_logging(level=config.log_level, enable_console=args.verbose or config.debug_mode)

    console = Console(highlight=False)
    try:
        config.ensure_valid()
    except ConfigurationError as e:
        console.print(f"[red]{_t('cli.config_invalid', errors='; '.join(e.errors))}[/red]")
        return 2

    try:
        return asyncio.run(_run(args, config, console))
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt - exiting")
        console.print(_t("cli.interrupted"))
        return 130


if __name__ == "__main__":
    sys.exit(main())
