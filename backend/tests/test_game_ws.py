"""End-to-end tests over the /ws channel using FastAPI's TestClient."""

from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app


@pytest.fixture
def client():
    # Long interval so scheduled ticks never interleave with the asserted frames.
    app = create_app(Settings(broadcast_interval_ms=60_000, index_html="does-not-exist.html"))
    with TestClient(app) as test_client:
        yield test_client


def _connect(ws) -> str:
    hello = ws.receive_json()
    assert hello["method"] == "connect"
    return hello["clientId"]


def test_connect_announces_a_fresh_client_id(client: TestClient) -> None:
    with client.websocket_connect("/ws") as ws1, client.websocket_connect("/ws") as ws2:
        assert _connect(ws1) != _connect(ws2)


def test_create_join_fill_and_reject(client: TestClient) -> None:
    with (
        client.websocket_connect("/ws") as ws_a,
        client.websocket_connect("/ws") as ws_b,
        client.websocket_connect("/ws") as ws_c,
        client.websocket_connect("/ws") as ws_d,
    ):
        a, b, c, d = (_connect(ws) for ws in (ws_a, ws_b, ws_c, ws_d))

        ws_a.send_json({"method": "create", "clientId": a})
        created = ws_a.receive_json()
        assert created["method"] == "create"
        game_id = created["game"]["id"]
        assert created["game"]["clients"] == []
        assert created["game"]["balls"] == 20

        ws_a.send_json({"method": "join", "clientId": a, "gameId": game_id})
        assert ws_a.receive_json()["game"]["clients"] == [{"clientId": a, "color": "Red"}]

        ws_b.send_json({"method": "join", "clientId": b, "gameId": game_id})
        for ws in (ws_a, ws_b):
            joined = ws.receive_json()
            assert joined["method"] == "join"
            assert [s["clientId"] for s in joined["game"]["clients"]] == [a, b]

        ws_c.send_json({"method": "join", "clientId": c, "gameId": game_id})
        for ws in (ws_a, ws_b, ws_c):
            joined = ws.receive_json()
            assert joined["method"] == "join"
            assert joined["game"]["clients"] == [
                {"clientId": a, "color": "Red"},
                {"clientId": b, "color": "Green"},
                {"clientId": c, "color": "Blue"},
            ]
            # Filling the game pushes state right away, without waiting for a tick.
            assert ws.receive_json()["method"] == "update"

        ws_d.send_json({"method": "join", "clientId": d, "gameId": game_id})
        assert ws_d.receive_json() == {
            "method": "error",
            "message": "Game is full. Maximum 3 players allowed.",
        }

        response = client.get(f"/api/games/{game_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "active"
        assert [s["clientId"] for s in body["game"]["clients"]] == [a, b, c]


def test_play_is_visible_on_the_next_update() -> None:
    app = create_app(Settings(broadcast_interval_ms=20))
    with TestClient(app) as test_client, test_client.websocket_connect("/ws") as ws:
        me = _connect(ws)
        ws.send_json({"method": "create", "clientId": me})
        game_id = ws.receive_json()["game"]["id"]
        ws.send_json({"method": "join", "clientId": me, "gameId": game_id})
        assert ws.receive_json()["method"] == "join"

        ws.send_json({"method": "play", "gameId": game_id, "ballId": 12, "color": "Red"})
        for _ in range(50):
            msg = ws.receive_json()
            assert msg["method"] == "update"
            if msg["game"]["state"] == {"12": "Red"}:
                break
        else:
            pytest.fail("play never showed up in an update")


def test_malformed_frame_gets_generic_error(client: TestClient) -> None:
    with client.websocket_connect("/ws") as ws:
        _connect(ws)
        ws.send_text("{not json")
        assert ws.receive_json() == {
            "method": "error",
            "message": "An error occurred processing your request",
        }
        # The connection stays usable afterwards.
        ws.send_text('{"method": "unknown"}')
        assert ws.receive_json()["method"] == "error"


def test_disconnect_removes_client_from_game(client: TestClient) -> None:
    with client.websocket_connect("/ws") as ws_a:
        a = _connect(ws_a)
        ws_a.send_json({"method": "create", "clientId": a})
        game_id = ws_a.receive_json()["game"]["id"]

        with client.websocket_connect("/ws") as ws_b:
            b = _connect(ws_b)
            ws_b.send_json({"method": "join", "clientId": b, "gameId": game_id})
            assert ws_b.receive_json()["method"] == "join"

        clients: list = [b]
        for _ in range(100):
            clients = client.get(f"/api/games/{game_id}").json()["game"]["clients"]
            if not clients:
                break
            time.sleep(0.01)
        assert clients == []
