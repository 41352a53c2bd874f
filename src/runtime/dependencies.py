"""Runtime dependency construction (session client, proxy, meeting bot)."""

from __future__ import annotations

import logging

from src.state import RuntimeDeps
from src.state.settings import AppSettings
from src.meeting.client import MeetingBotClient
from src.handlers.websocket.router import TranscriptionProxy
from src.transcription.client import TranscriptionSessionClient

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    session = TranscriptionSessionClient(audio=settings.audio, settings=settings.transcription)
    proxy = TranscriptionProxy(
        session,
        start_timeout_s=settings.transcription.start_timeout_s,
        drain_timeout_s=settings.proxy.drain_timeout_s,
        timestamp_source=settings.transcription.timestamp_source,
    )
    meeting = MeetingBotClient(settings.meeting)

    logger.info(
        "runtime: audio %sHz x%s (%s), languages=%s, transcript timestamps=%s",
        settings.audio.sample_rate,
        settings.audio.channels,
        settings.audio.encoding,
        ",".join(settings.transcription.languages),
        settings.transcription.timestamp_source,
    )
    return RuntimeDeps(proxy=proxy, session=session, meeting=meeting, settings=settings)


__all__ = ["RuntimeDeps", "build_runtime_deps"]
