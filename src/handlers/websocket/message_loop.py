"""Per-connection receive loop for proxy peers."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from src.state.peer import Peer
from src.state.messages import Payload

from .router import TranscriptionProxy

logger = logging.getLogger(__name__)

_DISCONNECT = "websocket.disconnect"


async def receive_payload(ws: WebSocket) -> Payload | None:
    """Next text or binary frame, or None once the peer is gone."""
    try:
        message = await ws.receive()
    except (WebSocketDisconnect, RuntimeError):
        # Starlette raises RuntimeError when receiving after a disconnect.
        return None
    if message.get("type") == _DISCONNECT:
        return None
    data = message.get("bytes")
    if data is not None:
        return data
    text = message.get("text")
    if text is not None:
        return text
    return None


async def run_message_loop(ws: WebSocket, peer: Peer, proxy: TranscriptionProxy) -> None:
    first = await receive_payload(ws)
    if first is None:
        return
    role = proxy.classify(peer, first)
    logger.debug("peer %s registered as %s", peer.peer_id, role.value)

    while True:
        payload = await receive_payload(ws)
        if payload is None:
            return
        # Per-peer ordering: the next frame is read only after this one is routed.
        await proxy.on_message(peer, payload)


__all__ = ["receive_payload", "run_message_loop"]
