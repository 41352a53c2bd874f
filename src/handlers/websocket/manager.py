"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from src.config.websocket import WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_GOING_AWAY_REASON

from .router import TranscriptionProxy
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _reject(ws: WebSocket) -> None:
    with contextlib.suppress(Exception):
        await ws.close(code=WS_CLOSE_GOING_AWAY_CODE, reason=WS_CLOSE_GOING_AWAY_REASON)


async def handle_websocket_connection(ws: WebSocket, proxy: TranscriptionProxy) -> None:
    if proxy.closing:
        await _reject(ws)
        return

    await ws.accept()
    peer = proxy.register(ws)
    if peer is None:
        await _reject(ws)
        return

    logger.info("New connection established peer=%s", peer.peer_id)
    try:
        await run_message_loop(ws, peer, proxy)
    finally:
        try:
            await proxy.on_peer_closed(peer)
        except Exception:
            logger.exception("cleanup failed for peer %s", peer.peer_id)


__all__ = ["handle_websocket_connection"]
