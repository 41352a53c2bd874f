"""Shared e2e client configuration."""

from __future__ import annotations

from .websocket import WS_PING_TIMEOUT_S, AUDIO_SOURCE_HELLO, WS_PING_INTERVAL_S, BOT_REGISTER_MESSAGE
from .audio import (
    CHUNK_MS,
    CHUNK_SAMPLES,
    STREAM_CHANNELS,
    DEFAULT_SILENCE_S,
    PCM16_SAMPLE_WIDTH,
    STREAM_SAMPLE_RATE,
)

__all__ = [
    "AUDIO_SOURCE_HELLO",
    "BOT_REGISTER_MESSAGE",
    "CHUNK_MS",
    "CHUNK_SAMPLES",
    "DEFAULT_SILENCE_S",
    "PCM16_SAMPLE_WIDTH",
    "STREAM_CHANNELS",
    "STREAM_SAMPLE_RATE",
    "WS_PING_INTERVAL_S",
    "WS_PING_TIMEOUT_S",
]
