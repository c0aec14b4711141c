"""Wire schemas for the game channel.

Every frame is a JSON object with a ``method`` field. Field names are
camelCase on the wire (``clientId``, ``gameId``, ``ballId``) and snake_case in
Python; the alias generator maps between them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .game import Game

GENERIC_ERROR_MESSAGE = "An error occurred processing your request"


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_frame(self) -> str:
        return self.model_dump_json(by_alias=True)


# --- inbound ---


class Envelope(BaseModel):
    """Only the dispatch key; per-method fields are validated separately."""

    model_config = ConfigDict(extra="allow")

    method: str


class CreateRequest(WireModel):
    method: Literal["create"] = "create"
    client_id: str = Field(min_length=1)


class JoinRequest(WireModel):
    method: Literal["join"] = "join"
    client_id: str = Field(min_length=1)
    game_id: str = Field(min_length=1)


class PlayRequest(WireModel):
    method: Literal["play"] = "play"
    game_id: str = Field(min_length=1)
    ball_id: str = Field(min_length=1)
    color: str = Field(min_length=1)

    @field_validator("ball_id", mode="before")
    @classmethod
    def _ball_id_as_key(cls, value: object) -> object:
        # Browsers send ball numbers; state keys are always strings in JSON.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


# --- outbound ---


class ClientSlotView(WireModel):
    client_id: str
    color: str


class GameView(WireModel):
    id: str
    balls: int
    clients: list[ClientSlotView]
    state: dict[str, str]

    @classmethod
    def from_game(cls, game: Game) -> GameView:
        return cls(
            id=game.id,
            balls=game.balls,
            clients=[ClientSlotView(client_id=s.client_id, color=s.color) for s in game.clients],
            state=dict(game.state),
        )


class ConnectMessage(WireModel):
    method: Literal["connect"] = "connect"
    client_id: str


class GameMessage(WireModel):
    method: Literal["create", "join", "update"]
    game: GameView

    @classmethod
    def for_game(cls, method: Literal["create", "join", "update"], game: Game) -> GameMessage:
        return cls(method=method, game=GameView.from_game(game))


class ErrorMessage(WireModel):
    method: Literal["error"] = "error"
    message: str = GENERIC_ERROR_MESSAGE
