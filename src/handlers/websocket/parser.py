"""Inbound payload parsing for the proxy envelope."""

from __future__ import annotations

import math
from typing import Any

import orjson

from src.state.peer import PeerRole
from src.state.messages import (
    Payload,
    SpeakerInfo,
    TextMessage,
    AudioMessage,
    ProxyMessage,
    SpeakerUpdate,
    UnrecognizedMessage,
    TranscriptionMessage,
)
from src.config.websocket import (
    WS_KEY_DATA,
    WS_KEY_TYPE,
    WS_TYPE_TEXT,
    WS_KEY_CLIENT,
    WS_TYPE_AUDIO,
    WS_REGISTER_TYPE,
    WS_REGISTER_CLIENT_BOT,
    WS_TYPE_TRANSCRIPTION,
)

_NOT_JSON = object()


def _load_json(payload: Payload) -> Any:
    try:
        return orjson.loads(payload)
    except (orjson.JSONDecodeError, TypeError):
        return _NOT_JSON


def _is_number(value: Any) -> bool:
    # Finite only: orjson reads overflowing literals such as 1e999 as inf.
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def classify_registration(payload: Payload) -> PeerRole:
    """Decide a peer's role from its first message.

    Only ``{"type": "register", "client": "bot"}`` selects the bot role; any
    other payload, parseable or not, marks an audio source.
    """
    msg = _load_json(payload)
    if (
        isinstance(msg, dict)
        and msg.get(WS_KEY_TYPE) == WS_REGISTER_TYPE
        and msg.get(WS_KEY_CLIENT) == WS_REGISTER_CLIENT_BOT
    ):
        return PeerRole.BOT
    return PeerRole.AUDIO_SOURCE


def _parse_speaker(item: Any) -> SpeakerInfo | None:
    if not isinstance(item, dict) or "name" not in item or "isSpeaking" not in item:
        return None
    speaker_id = item.get("id")
    timestamp = item.get("timestamp")
    return SpeakerInfo(
        name=str(item["name"]),
        id=int(speaker_id) if _is_number(speaker_id) else -1,
        is_speaking=bool(item["isSpeaking"]),
        timestamp=float(timestamp) if _is_number(timestamp) else None,
    )


def _parse_speaker_update(msg: list[Any]) -> SpeakerUpdate | None:
    if not msg:
        return None
    speakers = [_parse_speaker(item) for item in msg]
    # MeetingBaas sends homogeneous arrays; the first record decides the shape.
    if speakers[0] is None:
        return None
    return SpeakerUpdate(speakers=tuple(s for s in speakers if s is not None))


def _parse_audio(data: dict[str, Any]) -> AudioMessage | None:
    audio = data.get("audio")
    sample_rate = data.get("sampleRate")
    channels = data.get("channels")
    if not isinstance(audio, str) or not _is_number(sample_rate) or not _is_number(channels):
        return None
    return AudioMessage(audio=audio, sample_rate=int(sample_rate), channels=int(channels))


def _parse_transcription(data: dict[str, Any]) -> TranscriptionMessage | None:
    text = data.get("text")
    if not isinstance(text, str):
        return None
    start = data.get("startTime")
    end = data.get("endTime")
    return TranscriptionMessage(
        text=text,
        is_final=bool(data.get("isFinal", False)),
        start_time=float(start) if _is_number(start) else 0.0,
        end_time=float(end) if _is_number(end) else 0.0,
    )


def _parse_envelope(msg: dict[str, Any]) -> ProxyMessage | None:
    data = msg.get(WS_KEY_DATA)
    if not isinstance(data, dict):
        return None
    msg_type = msg.get(WS_KEY_TYPE)
    if msg_type == WS_TYPE_AUDIO:
        return _parse_audio(data)
    if msg_type == WS_TYPE_TRANSCRIPTION:
        return _parse_transcription(data)
    if msg_type == WS_TYPE_TEXT:
        text = data.get("text")
        return TextMessage(text=text) if isinstance(text, str) else None
    return None


def parse_message(payload: Payload) -> ProxyMessage:
    """Parse ``payload`` into exactly one envelope variant.

    Payloads that are not JSON, or JSON of an unknown shape, come back as
    ``UnrecognizedMessage`` holding the original payload untouched.
    """
    msg = _load_json(payload)
    if msg is _NOT_JSON:
        return UnrecognizedMessage(raw=payload, is_json=False)

    parsed: ProxyMessage | None = None
    if isinstance(msg, list):
        parsed = _parse_speaker_update(msg)
    elif isinstance(msg, dict):
        parsed = _parse_envelope(msg)
    if parsed is None:
        return UnrecognizedMessage(raw=payload, is_json=True)
    return parsed


__all__ = ["classify_registration", "parse_message"]
