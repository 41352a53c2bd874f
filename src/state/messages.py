"""Proxy envelope variants (dataclasses only).

Every inbound payload parses to exactly one of these. Anything that does not
match a known shape becomes an ``UnrecognizedMessage`` carrying the original
payload, so nothing is dropped on parse failure.
"""

from __future__ import annotations

from typing import Union
from dataclasses import dataclass

Payload = Union[bytes, str]


@dataclass(frozen=True, slots=True)
class AudioMessage:
    audio: str  # base64
    sample_rate: int
    channels: int


@dataclass(frozen=True, slots=True)
class TranscriptionMessage:
    text: str
    is_final: bool
    start_time: float
    end_time: float


@dataclass(frozen=True, slots=True)
class TextMessage:
    text: str


@dataclass(frozen=True, slots=True)
class SpeakerInfo:
    name: str
    id: int
    is_speaking: bool
    timestamp: float | None = None


@dataclass(frozen=True, slots=True)
class SpeakerUpdate:
    speakers: tuple[SpeakerInfo, ...]


@dataclass(frozen=True, slots=True)
class UnrecognizedMessage:
    raw: Payload
    is_json: bool


ProxyMessage = Union[AudioMessage, TranscriptionMessage, TextMessage, SpeakerUpdate, UnrecognizedMessage]

__all__ = [
    "AudioMessage",
    "Payload",
    "ProxyMessage",
    "SpeakerInfo",
    "SpeakerUpdate",
    "TextMessage",
    "TranscriptionMessage",
    "UnrecognizedMessage",
]
