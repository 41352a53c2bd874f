"""Send/close helpers that never raise on a half-closed peer."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocketDisconnect

from src.state.peer import Peer
from src.state.messages import Payload
from src.config.websocket import WS_KEY_DATA, WS_KEY_TYPE, WS_CLOSE_NORMAL_CODE

logger = logging.getLogger(__name__)


def build_envelope(msg_type: str, data: dict[str, Any]) -> dict[str, Any]:
    return {WS_KEY_TYPE: msg_type, WS_KEY_DATA: data}


async def safe_send(peer: Peer, payload: Payload) -> bool:
    """Send text as a text frame and bytes as a binary frame.

    Returns ``False`` without raising when the peer is closed or the send
    fails; a failed send marks the peer closed.
    """
    if not peer.is_open:
        return False
    try:
        if isinstance(payload, str):
            await peer.ws.send_text(payload)
        else:
            await peer.ws.send_bytes(bytes(payload))
    except WebSocketDisconnect:
        peer.closed = True
        return False
    except Exception:
        logger.debug("send to peer %s failed", peer.peer_id, exc_info=True)
        peer.closed = True
        return False
    return True


async def safe_send_envelope(peer: Peer, msg_type: str, data: dict[str, Any]) -> bool:
    return await safe_send(peer, orjson.dumps(build_envelope(msg_type, data)).decode("utf-8"))


async def safe_close(peer: Peer, *, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> None:
    if peer.closed:
        return
    peer.closed = True
    try:
        await peer.ws.close(code=code, reason=reason)
    except Exception:
        logger.debug("close of peer %s failed", peer.peer_id, exc_info=True)


__all__ = ["build_envelope", "safe_close", "safe_send", "safe_send_envelope"]
