"""接口请求体 / 响应视图的 Pydantic 模型

请求体模型负责字段命名 (playerName) 与类型约束；
GameSnapshot 只是命令行展示用的只读视图，客户端接口本身原样返回服务端数据。
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from game.enums import normalize_direction

# ====================================================================== #
#  客户端 → 服务端 请求体                                                   #
# ====================================================================== #


class DirectionRequest(BaseModel):
    """POST /game/{id}/direction 的请求体"""

    model_config = ConfigDict(extra="forbid")

    direction: str

    @field_validator("direction", mode="before")
    @classmethod
    def to_lowercase(cls, v: Any) -> str:
        return normalize_direction(v)


class ScoreRecord(BaseModel):
    """POST /game/{id}/record 的请求体"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    player_name: str = Field(alias="playerName")
    score: int


# ====================================================================== #
#  服务端 → 客户端 展示视图                                                 #
# ====================================================================== #


class Position(BaseModel):
    model_config = ConfigDict(extra="ignore")

    x: int
    y: int


class GameSnapshot(BaseModel):
    """游戏状态的展示视图 (忽略未知字段)"""

    model_config = ConfigDict(extra="ignore")

    id: str | int
    status: str = "running"
    score: int = 0
    width: int = 0
    height: int = 0
    food_count: int = Field(default=0, alias="foodCount")
    time: int = 0
    snake_body: list[Position] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> GameSnapshot:
        data = dict(payload)
        snake = data.get("snake")
        data["snake_body"] = (snake.get("body") if isinstance(snake, dict) else None) or []
        return cls.model_validate(data)

    @property
    def is_over(self) -> bool:
        return self.status == "ended"

    @property
    def length(self) -> int:
        return len(self.snake_body)
