from __future__ import annotations

import asyncio
import logging
import uuid

from pydantic import BaseModel

from models import ConnectMessage

logger = logging.getLogger(__name__)


class ClientChannel:
    """
    Outbound side of one client's WebSocket.

    - Frames are pre-serialized JSON text, so a queued snapshot never changes.
    - send() never blocks: a writer task in the route drains the outbox.
    - When the outbox is full the oldest frame is dropped (latest-wins).
    """

    def __init__(self, maxsize: int = 256) -> None:
        self._outbox: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, frame: str) -> bool:
        if self._closed:
            return False
        if self._outbox.full():
            try:
                _ = self._outbox.get_nowait()
                logger.warning("[clients] Outbox full; dropped oldest frame")
            except asyncio.QueueEmpty:
                pass
        try:
            self._outbox.put_nowait(frame)
        except asyncio.QueueFull:
            return False
        return True

    async def next_frame(self) -> str:
        return await self._outbox.get()

    def close(self) -> None:
        self._closed = True


class ClientRegistry:
    """Maps server-minted client ids to their open channels."""

    def __init__(self) -> None:
        self._channels: dict[str, ClientChannel] = {}

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._channels

    def __len__(self) -> int:
        return len(self._channels)

    def register(self, channel: ClientChannel) -> str:
        """Mint an id for a freshly opened channel and announce it over that channel."""
        client_id = str(uuid.uuid4())
        while client_id in self._channels:
            client_id = str(uuid.uuid4())
        self._channels[client_id] = channel
        channel.send(ConnectMessage(client_id=client_id).to_frame())
        logger.info("[clients] Registered client_id=%s (connected=%d)", client_id, len(self._channels))
        return client_id

    def unregister(self, client_id: str) -> ClientChannel | None:
        channel = self._channels.pop(client_id, None)
        if channel is not None:
            channel.close()
            logger.info("[clients] Unregistered client_id=%s (connected=%d)", client_id, len(self._channels))
        return channel

    def lookup(self, client_id: str) -> ClientChannel | None:
        return self._channels.get(client_id)

    def send(self, client_id: str, message: BaseModel | str) -> bool:
        """Serialize and enqueue a message for one client; False if the client is gone."""
        channel = self._channels.get(client_id)
        if channel is None:
            logger.debug("[clients] Dropping message for unknown client_id=%s", client_id)
            return False
        frame = message if isinstance(message, str) else message.model_dump_json(by_alias=True)
        return channel.send(frame)
