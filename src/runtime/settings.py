"""Environment parsing for runtime settings.

Env names and defaults live in `src/config/*`; this module resolves them into
the frozen dataclasses in `src/state/settings.py`.
"""

from __future__ import annotations

import os

from src.config.secrets import ENV_GLADIA_API_KEY, ENV_MEETING_BAAS_API_KEY
from src.state.settings import (
    AppSettings,
    AudioSettings,
    ProxySettings,
    MeetingBotSettings,
    TranscriptionSettings,
)
from src.config.websocket import (
    ENV_PROXY_HOST,
    ENV_PROXY_PORT,
    DEFAULT_PROXY_HOST,
    DEFAULT_PROXY_PORT,
    ENV_PROXY_DRAIN_TIMEOUT_S,
    DEFAULT_PROXY_DRAIN_TIMEOUT_S,
)
from src.config.meeting import (
    ENV_MEETING_BAAS_API_URL,
    ENV_MEETING_BAAS_TIMEOUT_S,
    DEFAULT_MEETING_BAAS_API_URL,
    DEFAULT_MEETING_BAAS_TIMEOUT_S,
)
from src.config.transcription import (
    TIMESTAMP_SOURCES,
    ENV_AUDIO_CHANNELS,
    ENV_AUDIO_ENCODING,
    ENV_GLADIA_API_URL,
    ENV_AUDIO_BIT_DEPTH,
    ENV_AUDIO_SAMPLE_RATE,
    ENV_GLADIA_LANGUAGES,
    DEFAULT_AUDIO_CHANNELS,
    DEFAULT_AUDIO_ENCODING,
    DEFAULT_GLADIA_API_URL,
    DEFAULT_AUDIO_BIT_DEPTH,
    DEFAULT_AUDIO_SAMPLE_RATE,
    DEFAULT_GLADIA_LANGUAGES,
    ENV_GLADIA_CODE_SWITCHING,
    ENV_GLADIA_START_TIMEOUT_S,
    DEFAULT_GLADIA_CODE_SWITCHING,
    DEFAULT_GLADIA_START_TIMEOUT_S,
    ENV_TRANSCRIPT_TIMESTAMP_SOURCE,
    DEFAULT_TRANSCRIPT_TIMESTAMP_SOURCE,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


def _validate_timestamp_source(source: str) -> str:
    source = source.lower()
    if source not in TIMESTAMP_SOURCES:
        raise ValueError(f"{ENV_TRANSCRIPT_TIMESTAMP_SOURCE} must be one of {sorted(TIMESTAMP_SOURCES)}")
    return source


def _load_proxy_settings() -> ProxySettings:
    port = _int_env(ENV_PROXY_PORT, DEFAULT_PROXY_PORT)
    if not 0 < port < 65536:
        port = DEFAULT_PROXY_PORT
    return ProxySettings(
        host=_str_env(ENV_PROXY_HOST, DEFAULT_PROXY_HOST),
        port=port,
        drain_timeout_s=max(0.0, _float_env(ENV_PROXY_DRAIN_TIMEOUT_S, DEFAULT_PROXY_DRAIN_TIMEOUT_S)),
    )


def _load_audio_settings() -> AudioSettings:
    return AudioSettings(
        sample_rate=max(1, _int_env(ENV_AUDIO_SAMPLE_RATE, DEFAULT_AUDIO_SAMPLE_RATE)),
        channels=max(1, _int_env(ENV_AUDIO_CHANNELS, DEFAULT_AUDIO_CHANNELS)),
        bit_depth=max(8, _int_env(ENV_AUDIO_BIT_DEPTH, DEFAULT_AUDIO_BIT_DEPTH)),
        encoding=_str_env(ENV_AUDIO_ENCODING, DEFAULT_AUDIO_ENCODING),
    )


def _load_transcription_settings() -> TranscriptionSettings:
    start_timeout = _float_env(ENV_GLADIA_START_TIMEOUT_S, DEFAULT_GLADIA_START_TIMEOUT_S)
    if start_timeout <= 0:
        start_timeout = DEFAULT_GLADIA_START_TIMEOUT_S
    return TranscriptionSettings(
        api_key=(os.getenv(ENV_GLADIA_API_KEY) or "").strip(),
        api_url=_str_env(ENV_GLADIA_API_URL, DEFAULT_GLADIA_API_URL).rstrip("/"),
        start_timeout_s=start_timeout,
        languages=_list_env(ENV_GLADIA_LANGUAGES, DEFAULT_GLADIA_LANGUAGES),
        code_switching=_bool_env(ENV_GLADIA_CODE_SWITCHING, DEFAULT_GLADIA_CODE_SWITCHING),
        timestamp_source=_validate_timestamp_source(
            _str_env(ENV_TRANSCRIPT_TIMESTAMP_SOURCE, DEFAULT_TRANSCRIPT_TIMESTAMP_SOURCE)
        ),
    )


def _load_meeting_settings() -> MeetingBotSettings:
    timeout = _float_env(ENV_MEETING_BAAS_TIMEOUT_S, DEFAULT_MEETING_BAAS_TIMEOUT_S)
    return MeetingBotSettings(
        api_key=(os.getenv(ENV_MEETING_BAAS_API_KEY) or "").strip(),
        api_url=_str_env(ENV_MEETING_BAAS_API_URL, DEFAULT_MEETING_BAAS_API_URL).rstrip("/"),
        timeout_s=timeout if timeout > 0 else DEFAULT_MEETING_BAAS_TIMEOUT_S,
    )


def load_settings() -> AppSettings:
    return AppSettings(
        proxy=_load_proxy_settings(),
        audio=_load_audio_settings(),
        transcription=_load_transcription_settings(),
        meeting=_load_meeting_settings(),
    )


def missing_api_keys(settings: AppSettings) -> list[str]:
    missing: list[str] = []
    if not settings.meeting.api_key:
        missing.append(ENV_MEETING_BAAS_API_KEY)
    if not settings.transcription.api_key:
        missing.append(ENV_GLADIA_API_KEY)
    return missing


__all__ = ["load_settings", "missing_api_keys"]
