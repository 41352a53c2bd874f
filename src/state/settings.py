"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProxySettings:
    host: str
    port: int
    drain_timeout_s: float


@dataclass(frozen=True, slots=True)
class AudioSettings:
    sample_rate: int
    channels: int
    bit_depth: int
    encoding: str


@dataclass(frozen=True, slots=True)
class TranscriptionSettings:
    api_key: str
    api_url: str
    start_timeout_s: float
    languages: tuple[str, ...]
    code_switching: bool
    timestamp_source: str


@dataclass(frozen=True, slots=True)
class MeetingBotSettings:
    api_key: str
    api_url: str
    timeout_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    proxy: ProxySettings
    audio: AudioSettings
    transcription: TranscriptionSettings
    meeting: MeetingBotSettings


__all__ = [
    "AppSettings",
    "AudioSettings",
    "MeetingBotSettings",
    "ProxySettings",
    "TranscriptionSettings",
]
