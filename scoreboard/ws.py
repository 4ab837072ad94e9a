"""WebSocket feed that pushes the roster and scores to connected clients."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from scoreboard import store
from scoreboard.records import snapshot_to_dict

logger = logging.getLogger(__name__)

clients: set[WebSocket] = set()


def snapshot_msg() -> dict:
    """Build a snapshot message from the current store."""
    return {
        "type": "snapshot",
        "players": store.get_roster(),
        "scores": snapshot_to_dict(store.snapshot()),
    }


async def broadcast(message: dict) -> None:
    """Send a JSON message to every connected client, dropping dead ones."""
    disconnected = []
    for ws in list(clients):
        try:
            await ws.send_json(message)
        except Exception:
            disconnected.append(ws)
    for ws in disconnected:
        clients.discard(ws)
    if disconnected:
        logger.info("WS: dropped %d unreachable client(s)", len(disconnected))


async def publish_snapshot() -> None:
    """Push the latest snapshot after a write."""
    await broadcast(snapshot_msg())


async def websocket_handler(ws: WebSocket) -> None:
    """Send the current snapshot, then keep the client subscribed."""
    await ws.accept()

    try:
        clients.add(ws)
        await ws.send_json(snapshot_msg())
        while True:
            data = await ws.receive_json()
            if isinstance(data, dict) and data.get("type") == "ping":
                await ws.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WebSocket error on snapshot feed")
    finally:
        clients.discard(ws)
