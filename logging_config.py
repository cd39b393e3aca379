"""Logging setup for the snake client.

Requests, retries and failures are logged by ``net.transport`` and
``net.client``. This module routes them to a rotating UTF-8 log file, so the
terminal output stays limited to what the CLI prints. ``--verbose`` adds a
stderr handler for warnings and errors (retries, give-ups).

Calling setup_logging() again reconfigures the existing handlers instead of
adding new ones.

Environment overrides:
    SNAKE_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR
    SNAKE_LOG_FILE=path/to/file.log
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FILE_HANDLER_NAME = "snake_client_file"
_CONSOLE_HANDLER_NAME = "snake_client_console"
_DEFAULT_LOG_PATH = Path("logs") / "snake_client.log"

_MAX_BYTES = 1024 * 1024
_BACKUP_COUNT = 3
_CONSOLE_LEVEL = logging.WARNING

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return logging._nameToLevel.get((level or "").strip().upper(), logging.INFO)


def _resolve_log_path(log_file: str | None) -> Path:
    log_path = Path(log_file) if log_file else _DEFAULT_LOG_PATH
    if not log_path.is_absolute():
        log_path = Path.cwd() / log_path
    return log_path


def setup_logging(
    *,
    level: str | int = "INFO",
    log_file: str | None = None,
    enable_console: bool = False,
) -> logging.Logger:
    """Route client logs to the rotating log file (and stderr when asked).

    Returns the root logger.
    """
    level = os.environ.get("SNAKE_LOG_LEVEL") or level
    log_path = _resolve_log_path(os.environ.get("SNAKE_LOG_FILE") or log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    fmt = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = {h.name: h for h in root.handlers}

    file_handler = handlers.get(_FILE_HANDLER_NAME)
    if file_handler is None:
        file_handler = RotatingFileHandler(
            log_path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.name = _FILE_HANDLER_NAME
        root.addHandler(file_handler)
    file_handler.setFormatter(fmt)
    file_handler.setLevel(_parse_level(level))

    console_handler = handlers.get(_CONSOLE_HANDLER_NAME)
    if enable_console and console_handler is None:
        console_handler = logging.StreamHandler()
        console_handler.name = _CONSOLE_HANDLER_NAME
        console_handler.setFormatter(fmt)
        console_handler.setLevel(_CONSOLE_LEVEL)
        root.addHandler(console_handler)
    elif not enable_console and console_handler is not None:
        root.removeHandler(console_handler)

    # httpx logs every request at INFO; net.client already logs each operation
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging initialized | level=%s file=%s console=%s", level, log_path, enable_console
    )
    return root
