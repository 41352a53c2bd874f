from __future__ import annotations

import json
import asyncio

import httpx
import pytest

from tests.utils import FakeUpstream, wait_until, make_settings
from src.state.session import SessionState
from src.state.transcript import TranscriptEvent
from src.transcription.client import TranscriptionSessionClient

LIVE_URL = "wss://gladia.test/v2/live?token=abc"


def _created(request: httpx.Request) -> httpx.Response:
    return httpx.Response(201, json={"id": "sess-1", "url": LIVE_URL})


class _Connector:
    def __init__(self, error: Exception | None = None) -> None:
        self.urls: list[str] = []
        self.upstream = FakeUpstream()
        self.error = error

    async def __call__(self, url: str) -> FakeUpstream:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.upstream


def _client(handler, connector: _Connector, **transcription) -> tuple[TranscriptionSessionClient, httpx.AsyncClient]:
    settings = make_settings(**transcription)
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=settings.transcription.api_url)
    client = TranscriptionSessionClient(
        audio=settings.audio,
        settings=settings.transcription,
        http_client=http,
        connect=connector,
    )
    return client, http


@pytest.mark.asyncio
async def test_start_creates_session_and_connects() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _created(request)

    connector = _Connector()
    client, http = _client(handler, connector)
    async with http:
        assert await client.start() is True
        assert client.state is SessionState.ACTIVE
        assert client.session_id == "sess-1"
        assert connector.urls == [LIVE_URL]

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/v2/live"
        assert request.headers["x-gladia-key"] == "gladia-test-key"
        body = json.loads(request.content)
        assert body["sample_rate"] == 24000
        assert body["language_config"] == {"languages": ["en"], "code_switching": False}

        # Already active: no second session.
        assert await client.start() is True
        assert len(seen) == 1

        await client.stop()


@pytest.mark.asyncio
async def test_audio_is_wrapped_in_chunk_frames() -> None:
    connector = _Connector()
    client, http = _client(_created, connector)
    async with http:
        await client.start()
        assert await client.send_audio(b"\x00\x01\x02") is True
        assert await client.send_audio("AAEC") is True
        frames = [json.loads(f) for f in connector.upstream.sent]
        assert frames == [
            {"type": "audio_chunk", "data": {"chunk": "AAEC"}},
            {"type": "audio_chunk", "data": {"chunk": "AAEC"}},
        ]
        await client.stop()


@pytest.mark.asyncio
async def test_transcripts_are_yielded_and_bad_frames_skipped() -> None:
    connector = _Connector()
    client, http = _client(_created, connector)
    async with http:
        await client.start()
        upstream = connector.upstream
        upstream.feed("not json")
        upstream.feed(json.dumps({"type": "speech_start"}))
        upstream.feed(json.dumps({"type": "transcript", "data": {"is_final": True, "utterance": {"text": "hello"}}}))

        stream = client.transcripts()
        event = await asyncio.wait_for(stream.__anext__(), timeout=1.0)
        assert event == TranscriptEvent(text="hello", is_final=True)

        await client.stop()
        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(stream.__anext__(), timeout=1.0)


@pytest.mark.asyncio
async def test_stop_sends_stop_frame_and_is_idempotent() -> None:
    connector = _Connector()
    client, http = _client(_created, connector)
    async with http:
        await client.start()
        await client.stop()
        await client.stop()

        upstream = connector.upstream
        assert json.loads(upstream.sent[-1]) == {"type": "stop_recording"}
        assert upstream.closed is True
        assert client.state is SessionState.INACTIVE
        assert client.session_id is None
        assert await client.send_audio(b"\x00") is False


@pytest.mark.asyncio
async def test_upstream_close_returns_to_inactive() -> None:
    connector = _Connector()
    client, http = _client(_created, connector)
    async with http:
        await client.start()
        stream = client.transcripts()
        connector.upstream.drop()

        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(stream.__anext__(), timeout=1.0)
        await wait_until(lambda: client.state is SessionState.INACTIVE)

        # A later start opens a fresh session.
        connector.upstream = FakeUpstream()
        assert await client.start() is True
        await client.stop()


@pytest.mark.asyncio
async def test_create_failure_leaves_session_inactive() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="bad key")

    connector = _Connector()
    client, http = _client(handler, connector)
    async with http:
        assert await client.start() is False
        assert client.state is SessionState.INACTIVE
        assert connector.urls == []


@pytest.mark.asyncio
async def test_response_without_url_fails() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json={"id": "sess-1"})

    client, http = _client(handler, _Connector())
    async with http:
        assert await client.start() is False
        assert client.state is SessionState.INACTIVE


@pytest.mark.asyncio
async def test_connect_failure_fails() -> None:
    connector = _Connector(error=OSError("refused"))
    client, http = _client(_created, connector)
    async with http:
        assert await client.start() is False
        assert client.state is SessionState.INACTIVE
        assert client.session_id is None


@pytest.mark.asyncio
async def test_missing_key_skips_the_request() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _created(request)

    client, http = _client(handler, _Connector(), api_key="")
    async with http:
        assert await client.start() is False
        assert seen == []


@pytest.mark.asyncio
async def test_send_audio_requires_active_session() -> None:
    client, http = _client(_created, _Connector())
    async with http:
        assert await client.send_audio(b"\x00\x01") is False
