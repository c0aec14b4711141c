from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from models import Game, GameMessage
from services.client_registry import ClientRegistry
from services.game_store import GameStore

logger = logging.getLogger(__name__)


class BroadcastLoop:
    """
    Periodic full-state fan-out of every game to its participants.

    Each iteration runs a tick and then sleeps the whole interval, so a slow
    tick pushes the next one back rather than stacking ticks up. Only one
    loop task exists per instance.
    """

    def __init__(self, games: GameStore, clients: ClientRegistry, *, interval: float = 0.5) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._games = games
        self._clients = clients
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self.ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def push_game(self, game: Game) -> int:
        """Send one update snapshot of ``game`` to each participant; returns frames delivered."""
        frame = GameMessage.for_game("update", game).to_frame()
        delivered = 0
        for client_id in game.client_ids():
            if self._clients.send(client_id, frame):
                delivered += 1
        return delivered

    def tick(self) -> int:
        delivered = 0
        for game in self._games.games():
            if game.clients:
                delivered += self.push_game(game)
        self.ticks += 1
        return delivered

    async def _run(self) -> None:
        logger.info("[broadcast] Loop started (interval=%.3fs)", self._interval)
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.tick()
            except Exception as exc:  # noqa: BLE001
                logger.error("[broadcast] Tick failed: %s", exc, exc_info=True)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
        logger.info("[broadcast] Loop stopped after %d ticks", self.ticks)
