"""Gladia live transcription session client."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable, AsyncIterator

import httpx
import websockets
from websockets.exceptions import ConnectionClosed

from src.errors import SessionStartError
from src.state.session import SessionState
from src.state.transcript import TranscriptEvent
from src.config.secrets import GLADIA_KEY_HEADER
from src.config.transcription import GLADIA_LIVE_PATH
from src.state.settings import AudioSettings, TranscriptionSettings

from .frames import build_stop_frame, build_session_request, parse_transcript_frame, build_audio_chunk_frame

logger = logging.getLogger(__name__)

ConnectFn = Callable[[str], Awaitable[Any]]


class TranscriptionSessionClient:
    """Owns at most one upstream Gladia websocket at a time.

    ``start`` creates a live session over HTTP and opens its websocket;
    ``transcripts`` yields parsed transcript events until that socket closes.
    """

    def __init__(
        self,
        *,
        audio: AudioSettings,
        settings: TranscriptionSettings,
        http_client: httpx.AsyncClient | None = None,
        connect: ConnectFn | None = None,
    ) -> None:
        self._audio = audio
        self._settings = settings
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=settings.api_url,
            timeout=settings.start_timeout_s,
        )
        self._connect = connect or websockets.connect
        self._state = SessionState.INACTIVE
        self._ws: Any | None = None
        self._session_id: str | None = None
        self._events: asyncio.Queue[TranscriptEvent | None] | None = None
        self._reader: asyncio.Task | None = None

        if not settings.api_key:
            logger.error("Gladia API key not found. Set GLADIA_API_KEY in the environment")

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session_id(self) -> str | None:
        return self._session_id

    async def start(self) -> bool:
        if self._state is not SessionState.INACTIVE:
            logger.debug("gladia: start ignored, session is %s", self._state.value)
            return self._state is SessionState.ACTIVE

        self._state = SessionState.STARTING
        try:
            url = await self._create_session()
            ws = await self._connect(url)
        except asyncio.CancelledError:
            self._reset()
            raise
        except Exception as exc:
            logger.error("Failed to initialize Gladia session: %s", exc)
            self._reset()
            return False

        events: asyncio.Queue[TranscriptEvent | None] = asyncio.Queue()
        self._ws = ws
        self._events = events
        self._state = SessionState.ACTIVE
        self._reader = asyncio.create_task(self._read_loop(ws, events))
        logger.info("Connected to Gladia WebSocket session_id=%s", self._session_id)
        return True

    async def send_audio(self, chunk: bytes | str) -> bool:
        ws = self._ws
        if ws is None or self._state is not SessionState.ACTIVE:
            logger.warning("Gladia WebSocket not connected, ignoring audio chunk")
            return False
        try:
            await ws.send(build_audio_chunk_frame(chunk))
        except Exception:
            logger.error("Error sending audio chunk to Gladia", exc_info=True)
            return False
        return True

    async def transcripts(self) -> AsyncIterator[TranscriptEvent]:
        events = self._events
        if events is None:
            return
        while True:
            event = await events.get()
            if event is None:
                return
            yield event

    async def stop(self) -> None:
        ws, reader = self._ws, self._reader
        was_active = ws is not None
        self._reset()
        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.send(build_stop_frame())
            with contextlib.suppress(Exception):
                await ws.close()
        if reader is not None:
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await reader
        if was_active:
            logger.info("Gladia transcription session ended")

    async def aclose(self) -> None:
        await self.stop()
        if self._owns_http:
            await self._http.aclose()

    def _reset(self) -> None:
        self._ws = None
        self._reader = None
        self._session_id = None
        self._state = SessionState.INACTIVE

    async def _create_session(self) -> str:
        if not self._settings.api_key:
            raise SessionStartError("GLADIA_API_KEY is not set")

        response = await self._http.post(
            GLADIA_LIVE_PATH,
            json=build_session_request(self._audio, self._settings),
            headers={GLADIA_KEY_HEADER: self._settings.api_key},
        )
        if response.is_error:
            raise SessionStartError(f"session create failed: {response.status_code} {response.text}")

        data = response.json()
        url = data.get("url") if isinstance(data, dict) else None
        if not isinstance(url, str) or not url:
            raise SessionStartError("session create response has no websocket url")

        session_id = data.get("id")
        self._session_id = session_id if isinstance(session_id, str) else None
        logger.info("Gladia session initialized: %s", self._session_id)
        return url

    async def _read_loop(self, ws: Any, events: asyncio.Queue[TranscriptEvent | None]) -> None:
        try:
            async for raw in ws:
                event = self._parse_frame(raw)
                if event is None:
                    continue
                logger.info("Transcription (%s): %s", "final" if event.is_final else "partial", event.text)
                events.put_nowait(event)
        except ConnectionClosed as exc:
            logger.error("Gladia WebSocket error: %s", exc)
        finally:
            events.put_nowait(None)
            if self._ws is ws:
                # Closed by the provider rather than by stop().
                self._reset()
                logger.info("Gladia WebSocket connection closed")

    @staticmethod
    def _parse_frame(raw: str | bytes) -> TranscriptEvent | None:
        try:
            return parse_transcript_frame(raw)
        except ValueError as exc:
            logger.error("Error parsing Gladia message: %s", exc)
            return None


__all__ = ["TranscriptionSessionClient"]
