from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from services.client_registry import ClientChannel
from services.coordinator import GameCoordinator

router = APIRouter(tags=["game"])
logger = logging.getLogger(__name__)


async def _pump_outbox(websocket: WebSocket, channel: ClientChannel, client_id: str) -> None:
    try:
        while True:
            frame = await channel.next_frame()
            await websocket.send_text(frame)
    except asyncio.CancelledError:
        raise
    except Exception as e:  # noqa: BLE001
        logger.warning("[game_ws] send failed client_id=%s: %s", client_id, e)


@router.websocket("/ws")
async def ws_game(websocket: WebSocket) -> None:
    """
    Game channel. Frames are JSON text:
      client -> server: create / join / play
      server -> client: connect / create / join / update / error
    """
    coordinator: GameCoordinator = websocket.app.state.coordinator
    try:
        await websocket.accept()
    except Exception as e:  # noqa: BLE001
        logger.warning("[game_ws] accept() failed: %s", e)
        return

    channel = coordinator.open_channel()
    client_id = coordinator.connect(channel)
    writer = asyncio.create_task(_pump_outbox(websocket, channel, client_id))
    logger.info("[game_ws] Client connected client_id=%s", client_id)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            coordinator.receive(channel, raw)
    except WebSocketDisconnect:
        pass
    except Exception as e:  # noqa: BLE001
        logger.error("[game_ws] connection error client_id=%s: %s", client_id, e, exc_info=True)
    finally:
        coordinator.disconnect(client_id)
        writer.cancel()
        with suppress(asyncio.CancelledError):
            await writer
        logger.info("[game_ws] Client disconnected client_id=%s", client_id)
