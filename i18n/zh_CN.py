"""简体中文翻译表。"""

STRINGS: dict[str, str] = {
    # ── 接口操作 ──
    "op.create_game": "创建游戏",
    "op.get_game_state": "获取游戏状态",
    "op.update_direction": "更新方向",
    "op.save_score": "保存得分",
    "op.get_leaderboard": "获取排行榜",

    # ── 错误 ──
    "error.client": "客户端错误",
    "error.remote_rejection": "{op}失败: {status}",
    "error.remote_rejection_detail": "{op}失败: {status} ({detail})",
    "error.malformed_response": "{op}失败: 响应内容无法解析",
    "error.transport": "{op}失败: {error}",
    "error.timeout": "请求超时",
    "error.configuration": "配置错误",

    # ── 命令行 ──
    "cli.description": "贪吃蛇游戏服务命令行客户端",
    "cli.game_created": "已创建游戏: {game_id}",
    "cli.direction_updated": "方向已更新为 {direction}",
    "cli.score_saved": "已保存 {name} 的得分 {score}",
    "cli.no_records": "暂无排行记录",
    "cli.leaderboard.title": "排行榜",
    "cli.leaderboard.rank": "名次",
    "cli.leaderboard.score": "得分",
    "cli.leaderboard.time": "用时(秒)",
    "cli.leaderboard.food": "食物",
    "cli.leaderboard.date": "时间",
    "cli.state.title": "游戏 {game_id}",
    "cli.state.status": "状态",
    "cli.state.score": "得分",
    "cli.state.length": "蛇长",
    "cli.state.board": "棋盘",
    "cli.game_over": "游戏结束，最终得分 {score}",
    "cli.interrupted": "\n已中断，再见！",
    "cli.config_invalid": "配置无效: {errors}",
}
