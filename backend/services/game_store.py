"""In-memory game store. Keyed by game ID, retained for the process lifetime."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from models import DEFAULT_BALL_COUNT, DEFAULT_SLOT_COLORS, ClientSlot, Game, GameStatus
from services.client_registry import ClientRegistry
from services.errors import AlreadyJoined, ClientUnknown, GameFull, GameNotFound

logger = logging.getLogger(__name__)


class GameStore:
    """
    Owns every Game record.

    Games hold client ids only; the registry is consulted to check that a
    joining client is actually connected. Capacity is the palette length.
    """

    def __init__(
        self,
        clients: ClientRegistry,
        *,
        slot_colors: Sequence[str] = DEFAULT_SLOT_COLORS,
        ball_count: int = DEFAULT_BALL_COUNT,
    ) -> None:
        if not slot_colors:
            raise ValueError("slot_colors must not be empty")
        self._clients = clients
        self._colors = tuple(slot_colors)
        self._ball_count = ball_count
        self._games: dict[str, Game] = {}

    @property
    def capacity(self) -> int:
        return len(self._colors)

    def __len__(self) -> int:
        return len(self._games)

    def get(self, game_id: str) -> Game | None:
        return self._games.get(game_id)

    def games(self) -> list[Game]:
        return list(self._games.values())

    def create(self) -> Game:
        game_id = str(uuid.uuid4())
        while game_id in self._games:
            game_id = str(uuid.uuid4())
        game = Game(id=game_id, capacity=self.capacity, balls=self._ball_count)
        self._games[game_id] = game
        logger.info("[game_store] Game created: game_id=%s capacity=%d", game_id, game.capacity)
        return game

    def _require(self, game_id: str) -> Game:
        game = self._games.get(game_id)
        if game is None:
            raise GameNotFound(game_id)
        return game

    def _next_color(self, game: Game) -> str:
        taken = {slot.color for slot in game.clients}
        return next(c for c in self._colors if c not in taken)

    def join(self, game_id: str, client_id: str) -> Game:
        """
        Add a connected client to a game and return the updated game.

        Raises GameNotFound, ClientUnknown, GameFull or AlreadyJoined, checked
        in that order; a failed join leaves the game untouched.
        """
        game = self._require(game_id)
        if client_id not in self._clients:
            raise ClientUnknown(client_id)
        if game.is_full:
            raise GameFull(game_id, game.capacity)
        if game.has_client(client_id):
            raise AlreadyJoined(game_id, client_id)

        slot = ClientSlot(client_id=client_id, color=self._next_color(game))
        game.clients.append(slot)
        if game.is_full and game.status is GameStatus.WAITING:
            game.status = GameStatus.ACTIVE
            logger.info("[game_store] Game %s is full; now active", game_id)
        logger.info(
            "[game_store] Client joined: game_id=%s client_id=%s color=%s players=%d/%d",
            game_id,
            client_id,
            slot.color,
            len(game.clients),
            game.capacity,
        )
        return game

    def record_play(self, game_id: str, ball_id: str, color: str) -> Game:
        """Set state[ball_id] = color. Any client may play; membership is not checked."""
        game = self._require(game_id)
        game.state[ball_id] = color
        logger.debug("[game_store] Play recorded: game_id=%s ball_id=%s color=%s", game_id, ball_id, color)
        return game

    def remove_client(self, client_id: str) -> list[Game]:
        """Drop a departed client from every game it occupies; returns the games touched."""
        touched: list[Game] = []
        for game in self._games.values():
            if not game.has_client(client_id):
                continue
            game.clients = [slot for slot in game.clients if slot.client_id != client_id]
            touched.append(game)
            logger.info(
                "[game_store] Client left: game_id=%s client_id=%s players=%d/%d",
                game.id,
                client_id,
                len(game.clients),
                game.capacity,
            )
        return touched
