"""Transcription proxy hub: peer roles, forwarding and session lifecycle."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from src.state.peer import Peer, PeerRole
from src.state.session import SessionState
from src.handlers.peers import PeerRegistry
from src.state.transcript import TranscriptEvent
from src.config.transcription import TIMESTAMP_SOURCE_PROVIDER, TIMESTAMP_SOURCE_DELIVERY
from src.config.websocket import WS_TYPE_TRANSCRIPTION, WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_GOING_AWAY_REASON
from src.state.messages import (
    Payload,
    AudioMessage,
    SpeakerUpdate,
    UnrecognizedMessage,
)

from .speakers import SpeakerTracker
from .inspector import inspect_message
from .errors import safe_send, safe_close, safe_send_envelope
from .parser import parse_message, classify_registration

logger = logging.getLogger(__name__)

ClockFn = Callable[[], float]


class TranscriptionProxy:
    """Routes traffic between one bot peer and any number of audio sources.

    The upstream transcription session runs while at least one audio source
    is connected: the first audio source starts it, the last one to leave
    stops it. ``session`` is anything exposing ``state``, ``start``,
    ``stop``, ``send_audio`` and ``transcripts``.
    """

    def __init__(
        self,
        session: Any,
        *,
        start_timeout_s: float,
        drain_timeout_s: float,
        timestamp_source: str = TIMESTAMP_SOURCE_DELIVERY,
        clock: ClockFn | None = None,
    ) -> None:
        self._session = session
        self._start_timeout_s = float(start_timeout_s)
        self._drain_timeout_s = float(drain_timeout_s)
        self._timestamp_source = timestamp_source
        self._clock = clock or time.time
        self._peers = PeerRegistry()
        self._speakers = SpeakerTracker()
        self._start_task: asyncio.Task | None = None
        self._pump_task: asyncio.Task | None = None
        self._closing = False
        self._closed = asyncio.Event()
        self._inflight = 0
        self._drained = asyncio.Event()
        self._drained.set()

    @property
    def closing(self) -> bool:
        return self._closing

    @property
    def peers(self) -> PeerRegistry:
        return self._peers

    @property
    def session_state(self) -> SessionState:
        return self._session.state

    @property
    def last_speaker(self) -> str | None:
        return self._speakers.last_speaker

    # Peer lifecycle

    def register(self, ws: Any) -> Peer | None:
        if self._closing:
            return None
        peer = Peer(ws=ws)
        self._peers.track(peer)
        return peer

    def classify(self, peer: Peer, payload: Payload) -> PeerRole:
        """Assign ``peer`` its role from its first message; the message is consumed."""
        role = classify_registration(payload)
        peer.assign_role(role)
        if role is PeerRole.BOT:
            previous = self._peers.set_bot(peer)
            if previous is not None:
                logger.info("Bot client %s replaces bot %s as transcript target", peer.peer_id, previous.peer_id)
            logger.info("Bot client connected peer=%s", peer.peer_id)
            return role

        self._peers.add_audio_source(peer)
        logger.info(
            "MeetingBaas client connected peer=%s. Audio sources: %s",
            peer.peer_id,
            self._peers.audio_source_count,
        )
        self._ensure_session()
        return role

    async def on_peer_closed(self, peer: Peer) -> None:
        peer.closed = True
        emptied = self._peers.remove(peer)
        if peer.role is PeerRole.BOT:
            logger.info("Bot client disconnected peer=%s", peer.peer_id)
            return
        if peer.role is PeerRole.UNCLASSIFIED:
            logger.info("Connection closed before registering peer=%s", peer.peer_id)
            return

        logger.info(
            "MeetingBaas client disconnected peer=%s. Audio sources: %s",
            peer.peer_id,
            self._peers.audio_source_count,
        )
        if emptied and not self._closing:
            await self._teardown_session()

    # Message routing

    async def on_message(self, peer: Peer, payload: Payload) -> None:
        if self._closing:
            return
        self._inflight += 1
        self._drained.clear()
        try:
            if peer.role is PeerRole.BOT:
                await self._handle_bot_message(payload)
            elif peer.role is PeerRole.AUDIO_SOURCE:
                await self._handle_audio_source_message(payload)
        except Exception:
            logger.exception("Error handling message from peer %s", peer.peer_id)
        finally:
            self._inflight -= 1
            if self._inflight == 0:
                self._drained.set()

    async def on_transcription(self, event: TranscriptEvent) -> bool:
        bot = self._peers.bot
        if bot is None or not bot.is_open:
            logger.debug("No bot client connected; transcript dropped")
            return False

        start_time, end_time = self._transcript_times(event)
        return await safe_send_envelope(
            bot,
            WS_TYPE_TRANSCRIPTION,
            {
                "text": event.text,
                "isFinal": event.is_final,
                "startTime": start_time,
                "endTime": end_time,
            },
        )

    def _transcript_times(self, event: TranscriptEvent) -> tuple[float, float]:
        if self._timestamp_source == TIMESTAMP_SOURCE_PROVIDER:
            return event.start, event.end
        now_ms = int(self._clock() * 1000)
        return now_ms, now_ms

    async def _handle_bot_message(self, payload: Payload) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Message from bot: %s", inspect_message(payload))
        sources = self._peers.audio_sources()
        if sources:
            # safe_send never raises; a slow peer must not delay the rest.
            await asyncio.gather(*(safe_send(source, payload) for source in sources))

    async def _handle_audio_source_message(self, payload: Payload) -> None:
        try:
            await self._route_from_audio_source(payload)
        finally:
            bot = self._peers.bot
            if bot is not None and bot.is_open:
                await safe_send(bot, payload)

    async def _route_from_audio_source(self, payload: Payload) -> None:
        message = parse_message(payload)

        if isinstance(message, SpeakerUpdate):
            speaker = self._speakers.observe(message)
            if speaker is not None:
                logger.info("New speaker: %s (id: %s)", speaker.name, speaker.id)
            return

        if isinstance(message, AudioMessage):
            await self._send_audio(message.audio)
            return

        if isinstance(message, UnrecognizedMessage) and not message.is_json:
            await self._send_audio(payload)
            return

        logger.info("Message from MeetingBaas: %s", inspect_message(payload))

    async def _send_audio(self, chunk: bytes | str) -> None:
        # No buffering: audio arriving before the session is ACTIVE is lost.
        if self._session.state is SessionState.ACTIVE:
            await self._session.send_audio(chunk)

    # Session lifecycle

    def _ensure_session(self) -> None:
        if self._closing or self._start_task is not None:
            return
        if self._session.state is not SessionState.INACTIVE:
            return
        self._start_task = asyncio.create_task(self._start_session())

    async def _start_session(self) -> None:
        try:
            try:
                ok = await asyncio.wait_for(self._session.start(), timeout=self._start_timeout_s)
            except TimeoutError:
                logger.error("Gladia session start timed out after %.1fs", self._start_timeout_s)
                ok = False
        finally:
            if self._start_task is asyncio.current_task():
                self._start_task = None

        if not ok:
            logger.error("Transcription session unavailable; audio is dropped until the next audio source connects")
            return
        if self._closing or self._peers.audio_source_count == 0:
            await self._session.stop()
            return
        self._pump_task = asyncio.create_task(self._pump_transcripts())

    async def _pump_transcripts(self) -> None:
        async for event in self._session.transcripts():
            try:
                await self.on_transcription(event)
            except Exception:
                logger.exception("Error forwarding transcript to bot")

    async def _teardown_session(self) -> None:
        start_task, self._start_task = self._start_task, None
        if start_task is not None:
            start_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await start_task

        # Detach this session's pump before awaiting stop(): a source joining
        # meanwhile starts a new session whose pump must survive.
        pump_task, self._pump_task = self._pump_task, None

        if self._session.state is not SessionState.INACTIVE:
            logger.info("Ending Gladia transcription session...")
        await self._session.stop()

        if pump_task is not None:
            pump_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await pump_task

        # A source may have connected while the old session was winding down.
        if self._peers.audio_source_count and not self._closing:
            self._ensure_session()

    # Shutdown

    async def shutdown(self) -> None:
        if self._closing:
            await self._closed.wait()
            return
        self._closing = True
        try:
            logger.info("Proxy shutting down")
            try:
                await asyncio.wait_for(self._drained.wait(), timeout=self._drain_timeout_s)
            except TimeoutError:
                logger.warning("Shutdown proceeding with %s message handlers still in flight", self._inflight)

            await self._teardown_session()

            for peer in self._peers.known():
                await safe_close(peer, code=WS_CLOSE_GOING_AWAY_CODE, reason=WS_CLOSE_GOING_AWAY_REASON)
            self._peers.clear()
            self._speakers.reset()
            logger.info("Proxy closed")
        finally:
            self._closed.set()


__all__ = ["TranscriptionProxy"]
