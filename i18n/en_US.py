"""English translation table."""

STRINGS: dict[str, str] = {
    # ── operations ──
    "op.create_game": "create game",
    "op.get_game_state": "get game state",
    "op.update_direction": "update direction",
    "op.save_score": "save score",
    "op.get_leaderboard": "get leaderboard",

    # ── errors ──
    "error.client": "Client error",
    "error.remote_rejection": "Failed to {op}: {status}",
    "error.remote_rejection_detail": "Failed to {op}: {status} ({detail})",
    "error.malformed_response": "Failed to {op}: response body could not be parsed",
    "error.transport": "Failed to {op}: {error}",
    "error.timeout": "request timed out",
    "error.configuration": "Configuration error",

    # ── CLI ──
    "cli.description": "Command line client for the snake game service",
    "cli.game_created": "Game created: {game_id}",
    "cli.direction_updated": "Direction set to {direction}",
    "cli.score_saved": "Saved score {score} for {name}",
    "cli.no_records": "No leaderboard records yet",
    "cli.leaderboard.title": "Leaderboard",
    "cli.leaderboard.rank": "Rank",
    "cli.leaderboard.score": "Score",
    "cli.leaderboard.time": "Time (s)",
    "cli.leaderboard.food": "Food",
    "cli.leaderboard.date": "Date",
    "cli.state.title": "Game {game_id}",
    "cli.state.status": "Status",
    "cli.state.score": "Score",
    "cli.state.length": "Length",
    "cli.state.board": "Board",
    "cli.game_over": "Game over, final score {score}",
    "cli.interrupted": "\nInterrupted. Goodbye!",
    "cli.config_invalid": "Invalid configuration: {errors}",
}
