"""Gladia live transcription configuration (env names and defaults only)."""

from __future__ import annotations

ENV_GLADIA_API_URL = "GLADIA_API_URL"
ENV_GLADIA_START_TIMEOUT_S = "GLADIA_START_TIMEOUT_S"
ENV_GLADIA_LANGUAGES = "GLADIA_LANGUAGES"
ENV_GLADIA_CODE_SWITCHING = "GLADIA_CODE_SWITCHING"
ENV_AUDIO_SAMPLE_RATE = "AUDIO_SAMPLE_RATE"
ENV_AUDIO_CHANNELS = "AUDIO_CHANNELS"
ENV_AUDIO_BIT_DEPTH = "AUDIO_BIT_DEPTH"
ENV_AUDIO_ENCODING = "AUDIO_ENCODING"
ENV_TRANSCRIPT_TIMESTAMP_SOURCE = "TRANSCRIPT_TIMESTAMP_SOURCE"

DEFAULT_GLADIA_API_URL = "https://api.gladia.io"
GLADIA_LIVE_PATH = "/v2/live"

# A hung session-create call would otherwise leave the session STARTING forever.
DEFAULT_GLADIA_START_TIMEOUT_S = 15.0
DEFAULT_GLADIA_LANGUAGES: tuple[str, ...] = ("en",)
DEFAULT_GLADIA_CODE_SWITCHING = False

# MeetingBaas streams 24kHz mono PCM16.
DEFAULT_AUDIO_SAMPLE_RATE = 24000
DEFAULT_AUDIO_CHANNELS = 1
DEFAULT_AUDIO_BIT_DEPTH = 16
DEFAULT_AUDIO_ENCODING = "wav/pcm"

# Provider frame types
GLADIA_TYPE_AUDIO_CHUNK = "audio_chunk"
GLADIA_TYPE_STOP_RECORDING = "stop_recording"
GLADIA_TYPE_TRANSCRIPT = "transcript"

# "delivery": local wall clock (ms) when the transcript reaches the proxy.
# "provider": utterance start/end offsets reported by Gladia (seconds).
TIMESTAMP_SOURCE_DELIVERY = "delivery"
TIMESTAMP_SOURCE_PROVIDER = "provider"
TIMESTAMP_SOURCES = frozenset({TIMESTAMP_SOURCE_DELIVERY, TIMESTAMP_SOURCE_PROVIDER})
DEFAULT_TRANSCRIPT_TIMESTAMP_SOURCE = TIMESTAMP_SOURCE_DELIVERY

__all__ = [
    "DEFAULT_AUDIO_BIT_DEPTH",
    "DEFAULT_AUDIO_CHANNELS",
    "DEFAULT_AUDIO_ENCODING",
    "DEFAULT_AUDIO_SAMPLE_RATE",
    "DEFAULT_GLADIA_API_URL",
    "DEFAULT_GLADIA_CODE_SWITCHING",
    "DEFAULT_GLADIA_LANGUAGES",
    "DEFAULT_GLADIA_START_TIMEOUT_S",
    "DEFAULT_TRANSCRIPT_TIMESTAMP_SOURCE",
    "ENV_AUDIO_BIT_DEPTH",
    "ENV_AUDIO_CHANNELS",
    "ENV_AUDIO_ENCODING",
    "ENV_AUDIO_SAMPLE_RATE",
    "ENV_GLADIA_API_URL",
    "ENV_GLADIA_CODE_SWITCHING",
    "ENV_GLADIA_LANGUAGES",
    "ENV_GLADIA_START_TIMEOUT_S",
    "ENV_TRANSCRIPT_TIMESTAMP_SOURCE",
    "GLADIA_LIVE_PATH",
    "GLADIA_TYPE_AUDIO_CHUNK",
    "GLADIA_TYPE_STOP_RECORDING",
    "GLADIA_TYPE_TRANSCRIPT",
    "TIMESTAMP_SOURCES",
    "TIMESTAMP_SOURCE_DELIVERY",
    "TIMESTAMP_SOURCE_PROVIDER",
]
