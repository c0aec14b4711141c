from __future__ import annotations

import logging
from collections.abc import Sequence

from models import DEFAULT_BALL_COUNT, DEFAULT_SLOT_COLORS
from services.broadcast_loop import BroadcastLoop
from services.client_registry import ClientChannel, ClientRegistry
from services.game_store import GameStore
from services.protocol import HandleResult, ProtocolHandler

logger = logging.getLogger(__name__)


class GameCoordinator:
    """
    Owns the client registry, the game store, the protocol handler and the
    broadcast loop for one server. Every channel event goes through here.
    """

    def __init__(
        self,
        *,
        slot_colors: Sequence[str] = DEFAULT_SLOT_COLORS,
        ball_count: int = DEFAULT_BALL_COUNT,
        broadcast_interval: float = 0.5,
        outbox_size: int = 256,
        clients: ClientRegistry | None = None,
        games: GameStore | None = None,
    ) -> None:
        self.clients = clients if clients is not None else ClientRegistry()
        if games is None:
            games = GameStore(self.clients, slot_colors=slot_colors, ball_count=ball_count)
        self.games = games
        self.broadcaster = BroadcastLoop(self.games, self.clients, interval=broadcast_interval)
        self.protocol = ProtocolHandler(self.games, self.clients, self.broadcaster)
        self._outbox_size = outbox_size

    def open_channel(self) -> ClientChannel:
        return ClientChannel(maxsize=self._outbox_size)

    def connect(self, channel: ClientChannel) -> str:
        return self.clients.register(channel)

    def receive(self, channel: ClientChannel, raw: str | bytes) -> HandleResult:
        return self.protocol.handle(channel, raw)

    def disconnect(self, client_id: str) -> None:
        self.clients.unregister(client_id)
        left = self.games.remove_client(client_id)
        if left:
            logger.info("[coordinator] client_id=%s removed from %d game(s)", client_id, len(left))

    def start(self) -> None:
        self.broadcaster.start()

    async def stop(self) -> None:
        await self.broadcaster.stop()
