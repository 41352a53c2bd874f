"""In-memory stand-ins for peers, the upstream session and the meeting bot."""

from __future__ import annotations

import asyncio
from typing import Any
from collections.abc import Callable

from src.state.session import SessionState
from src.state.transcript import TranscriptEvent
from src.state.settings import (
    AppSettings,
    AudioSettings,
    ProxySettings,
    MeetingBotSettings,
    TranscriptionSettings,
)


async def wait_until(predicate: Callable[[], bool], *, timeout: float = 1.0, tick: float = 0.005) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(tick)


def make_settings(**transcription: Any) -> AppSettings:
    fields: dict[str, Any] = {
        "api_key": "gladia-test-key",
        "api_url": "https://gladia.test",
        "start_timeout_s": 1.0,
        "languages": ("en",),
        "code_switching": False,
        "timestamp_source": "delivery",
    }
    fields.update(transcription)
    return AppSettings(
        proxy=ProxySettings(host="127.0.0.1", port=8765, drain_timeout_s=0.5),
        audio=AudioSettings(sample_rate=24000, channels=1, bit_depth=16, encoding="wav/pcm"),
        transcription=TranscriptionSettings(**fields),
        meeting=MeetingBotSettings(api_key="baas-test-key", api_url="https://baas.test", timeout_s=1.0),
    )


class FakePeerSocket:
    """Duck-types the parts of ``fastapi.WebSocket`` the proxy touches."""

    def __init__(
        self,
        incoming: list[bytes | str] | None = None,
        *,
        fail_sends: bool = False,
        send_gate: asyncio.Event | None = None,
    ) -> None:
        self.sent: list[tuple[str, bytes | str]] = []
        self.send_gate = send_gate
        self.accepted = False
        self.closed_with: tuple[int, str] | None = None
        self.fail_sends = fail_sends
        self._incoming: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        for payload in incoming or []:
            self.push(payload)

    @property
    def texts(self) -> list[str]:
        return [payload for kind, payload in self.sent if kind == "text"]

    def push(self, payload: bytes | str) -> None:
        key = "text" if isinstance(payload, str) else "bytes"
        self._incoming.put_nowait({"type": "websocket.receive", key: payload})

    def disconnect(self, code: int = 1000) -> None:
        self._incoming.put_nowait({"type": "websocket.disconnect", "code": code})

    async def accept(self) -> None:
        self.accepted = True

    async def receive(self) -> dict[str, Any]:
        return await self._incoming.get()

    async def send_text(self, data: str) -> None:
        if self.send_gate is not None:
            await self.send_gate.wait()
        if self.fail_sends:
            raise RuntimeError("socket is gone")
        self.sent.append(("text", data))

    async def send_bytes(self, data: bytes) -> None:
        if self.send_gate is not None:
            await self.send_gate.wait()
        if self.fail_sends:
            raise RuntimeError("socket is gone")
        self.sent.append(("bytes", data))

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.closed_with = (code, reason or "")


class FakeSession:
    """Transcription session double with an optional gate on ``start``."""

    def __init__(
        self,
        *,
        start_result: bool = True,
        gate: asyncio.Event | None = None,
        send_error: Exception | None = None,
        send_gate: asyncio.Event | None = None,
        stop_gate: asyncio.Event | None = None,
    ) -> None:
        self.state = SessionState.INACTIVE
        self.start_calls = 0
        self.stop_calls = 0
        self.aclose_calls = 0
        self.sends_started = 0
        self.sent: list[bytes | str] = []
        self.start_result = start_result
        self.gate = gate
        self.send_error = send_error
        self.send_gate = send_gate
        self.stop_gate = stop_gate
        self._events: asyncio.Queue[TranscriptEvent | None] | None = None

    async def start(self) -> bool:
        self.start_calls += 1
        self.state = SessionState.STARTING
        try:
            if self.gate is not None:
                await self.gate.wait()
        except asyncio.CancelledError:
            self.state = SessionState.INACTIVE
            raise
        if not self.start_result:
            self.state = SessionState.INACTIVE
            return False
        self._events = asyncio.Queue()
        self.state = SessionState.ACTIVE
        return True

    async def stop(self) -> None:
        self.stop_calls += 1
        events, self._events = self._events, None
        self.state = SessionState.INACTIVE
        if events is not None:
            events.put_nowait(None)
        # Like the real client: state resets first, then the close handshake is awaited.
        if self.stop_gate is not None:
            await self.stop_gate.wait()

    async def aclose(self) -> None:
        self.aclose_calls += 1
        await self.stop()

    async def send_audio(self, chunk: bytes | str) -> bool:
        self.sends_started += 1
        if self.send_gate is not None:
            await self.send_gate.wait()
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(chunk)
        return True

    async def transcripts(self):
        events = self._events
        if events is None:
            return
        while True:
            event = await events.get()
            if event is None:
                return
            yield event

    def emit(self, event: TranscriptEvent) -> None:
        assert self._events is not None, "session is not active"
        self._events.put_nowait(event)


class FakeUpstream:
    """Provider websocket double: records sends, yields fed frames."""

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False
        self._frames: asyncio.Queue[str | bytes | None] = asyncio.Queue()

    def feed(self, frame: str | bytes) -> None:
        self._frames.put_nowait(frame)

    def drop(self) -> None:
        self._frames.put_nowait(None)

    async def send(self, frame: str) -> None:
        if self.closed:
            raise RuntimeError("upstream closed")
        self.sent.append(frame)

    async def close(self) -> None:
        self.closed = True
        self._frames.put_nowait(None)

    def __aiter__(self) -> FakeUpstream:
        return self

    async def __anext__(self) -> str | bytes:
        frame = await self._frames.get()
        if frame is None:
            raise StopAsyncIteration
        return frame


class FakeMeeting:
    def __init__(self) -> None:
        self.joined: list[tuple[str, str, str | None]] = []
        self.disconnect_calls = 0
        self.aclose_calls = 0

    async def connect(self, meeting_url: str, bot_name: str, webhook_url: str | None = None) -> bool:
        self.joined.append((meeting_url, bot_name, webhook_url))
        return True

    async def disconnect(self) -> None:
        self.disconnect_calls += 1

    async def aclose(self) -> None:
        self.aclose_calls += 1


__all__ = [
    "FakeMeeting",
    "FakePeerSocket",
    "FakeSession",
    "FakeUpstream",
    "make_settings",
    "wait_until",
]
