"""Inbound message dispatch for the game channel."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ValidationError

from models import (
    CreateRequest,
    Envelope,
    ErrorMessage,
    Game,
    GameMessage,
    GameStatus,
    JoinRequest,
    PlayRequest,
)
from services.broadcast_loop import BroadcastLoop
from services.client_registry import ClientChannel, ClientRegistry
from services.errors import AlreadyJoined, ClientUnknown, GameFull, GameNotFound
from services.game_store import GameStore

logger = logging.getLogger(__name__)


class Outcome(StrEnum):
    OK = "ok"
    MALFORMED = "malformed"          # answered with a generic error
    INVALID = "invalid"              # missing/invalid fields, logged only
    GAME_NOT_FOUND = "game_not_found"
    CLIENT_UNKNOWN = "client_unknown"
    FULL = "full"                    # the only failure the requester hears about
    DUPLICATE = "duplicate"


@dataclass
class HandleResult:
    method: str | None
    outcome: Outcome
    game: Game | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


class ProtocolHandler:
    """
    Decode one inbound frame, apply it to the stores and emit replies.

    Replies go out through the registry. Only malformed frames and joins on
    a full game are answered with an error; every other failure is logged and
    reported through the returned HandleResult.
    """

    def __init__(self, games: GameStore, clients: ClientRegistry, broadcaster: BroadcastLoop) -> None:
        self._games = games
        self._clients = clients
        self._broadcaster = broadcaster
        self._handlers: dict[str, Callable[[dict[str, Any]], HandleResult]] = {
            "create": self._create,
            "join": self._join,
            "play": self._play,
        }

    def handle(self, sender: ClientChannel, raw: str | bytes) -> HandleResult:
        method: str | None = None
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            method = Envelope.model_validate(data).method
            handler = self._handlers.get(method)
            if handler is None:
                raise ValueError(f"unknown method {method!r}")
            return handler(data)
        except Exception as exc:  # noqa: BLE001
            logger.error("[protocol] Error processing message: %s", exc, exc_info=not isinstance(exc, ValueError))
            sender.send(ErrorMessage().to_frame())
            return HandleResult(method=method, outcome=Outcome.MALFORMED)

    def _parse(self, model: type[BaseModel], data: dict[str, Any]) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning(
                "[protocol] Invalid %s parameters: %s",
                data.get("method"),
                "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()),
            )
            return None

    def _create(self, data: dict[str, Any]) -> HandleResult:
        request: CreateRequest | None = self._parse(CreateRequest, data)
        if request is None:
            return HandleResult(method="create", outcome=Outcome.INVALID)
        if request.client_id not in self._clients:
            logger.warning("[protocol] Invalid client ID for game creation: %s", request.client_id)
            return HandleResult(method="create", outcome=Outcome.CLIENT_UNKNOWN)

        game = self._games.create()
        self._clients.send(request.client_id, GameMessage.for_game("create", game))
        return HandleResult(method="create", outcome=Outcome.OK, game=game)

    def _join(self, data: dict[str, Any]) -> HandleResult:
        request: JoinRequest | None = self._parse(JoinRequest, data)
        if request is None:
            return HandleResult(method="join", outcome=Outcome.INVALID)

        try:
            was_waiting = self._status_of(request.game_id) is GameStatus.WAITING
            game = self._games.join(request.game_id, request.client_id)
        except GameFull as exc:
            logger.info("[protocol] Join rejected for client_id=%s: %s", request.client_id, exc)
            self._clients.send(request.client_id, ErrorMessage(message=str(exc)))
            return HandleResult(method="join", outcome=Outcome.FULL, game=self._games.get(request.game_id))
        except GameNotFound as exc:
            logger.warning("[protocol] %s", exc)
            return HandleResult(method="join", outcome=Outcome.GAME_NOT_FOUND)
        except ClientUnknown as exc:
            logger.warning("[protocol] %s", exc)
            return HandleResult(method="join", outcome=Outcome.CLIENT_UNKNOWN)
        except AlreadyJoined as exc:
            logger.warning("[protocol] %s", exc)
            return HandleResult(method="join", outcome=Outcome.DUPLICATE, game=self._games.get(request.game_id))

        frame = GameMessage.for_game("join", game).to_frame()
        for client_id in game.client_ids():
            self._clients.send(client_id, frame)

        # Filling the last slot starts the game; push state now instead of on the next tick.
        if was_waiting and game.status is GameStatus.ACTIVE:
            self._broadcaster.push_game(game)
        return HandleResult(method="join", outcome=Outcome.OK, game=game)

    def _play(self, data: dict[str, Any]) -> HandleResult:
        request: PlayRequest | None = self._parse(PlayRequest, data)
        if request is None:
            return HandleResult(method="play", outcome=Outcome.INVALID)
        try:
            game = self._games.record_play(request.game_id, request.ball_id, request.color)
        except GameNotFound as exc:
            logger.warning("[protocol] %s", exc)
            return HandleResult(method="play", outcome=Outcome.GAME_NOT_FOUND)
        return HandleResult(method="play", outcome=Outcome.OK, game=game)

    def _status_of(self, game_id: str) -> GameStatus | None:
        game = self._games.get(game_id)
        return game.status if game is not None else None
