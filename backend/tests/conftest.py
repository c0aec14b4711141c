from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import pytest

from services import ClientChannel, GameCoordinator


def _drain(channel: ClientChannel) -> list[dict[str, Any]]:
    frames: list[dict[str, Any]] = []
    while True:
        try:
            frames.append(json.loads(channel._outbox.get_nowait()))
        except asyncio.QueueEmpty:
            return frames


@pytest.fixture
def drain() -> Callable[[ClientChannel], list[dict[str, Any]]]:
    """Pop every queued frame off a channel and decode it."""
    return _drain


@pytest.fixture
def coordinator() -> GameCoordinator:
    return GameCoordinator(broadcast_interval=60.0)


@pytest.fixture
def connect(coordinator: GameCoordinator):
    """Open a channel, register it and discard the connect frame."""

    def _connect() -> tuple[str, ClientChannel]:
        channel = coordinator.open_channel()
        client_id = coordinator.connect(channel)
        _drain(channel)
        return client_id, channel

    return _connect
