"""Gladia live protocol frames (session request, audio chunks, transcripts)."""

from __future__ import annotations

import base64
from typing import Any

import orjson

from src.state.transcript import TranscriptEvent
from src.state.settings import AudioSettings, TranscriptionSettings
from src.config.transcription import (
    GLADIA_TYPE_TRANSCRIPT,
    GLADIA_TYPE_AUDIO_CHUNK,
    GLADIA_TYPE_STOP_RECORDING,
)


def build_session_request(audio: AudioSettings, transcription: TranscriptionSettings) -> dict[str, Any]:
    return {
        "encoding": audio.encoding,
        "bit_depth": audio.bit_depth,
        "sample_rate": audio.sample_rate,
        "channels": audio.channels,
        "language_config": {
            "languages": list(transcription.languages),
            "code_switching": transcription.code_switching,
        },
        "messages_config": {
            "receive_partial_transcripts": True,
            "receive_final_transcripts": True,
        },
    }


def encode_audio_chunk(chunk: bytes | bytearray | memoryview | str) -> str:
    """Return base64 audio. Strings are taken as already encoded."""
    if isinstance(chunk, str):
        return chunk
    return base64.b64encode(bytes(chunk)).decode("ascii")


def build_audio_chunk_frame(chunk: bytes | bytearray | memoryview | str) -> str:
    frame = {"type": GLADIA_TYPE_AUDIO_CHUNK, "data": {"chunk": encode_audio_chunk(chunk)}}
    return orjson.dumps(frame).decode("utf-8")


def build_stop_frame() -> str:
    return orjson.dumps({"type": GLADIA_TYPE_STOP_RECORDING}).decode("utf-8")


def _as_seconds(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def parse_transcript_frame(raw: str | bytes) -> TranscriptEvent | None:
    """Parse one inbound Gladia frame.

    Returns ``None`` for frames of any other kind and for transcripts without
    text. Raises ``ValueError`` when the frame is not a JSON object or a
    transcript frame lacks its ``data`` object.
    """
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("frame must be a JSON object")
    if msg.get("type") != GLADIA_TYPE_TRANSCRIPT:
        return None

    data = msg.get("data")
    if not isinstance(data, dict):
        raise ValueError("transcript frame missing 'data' object")

    utterance = data.get("utterance")
    if not isinstance(utterance, dict):
        return None
    text = utterance.get("text")
    if not isinstance(text, str) or not text:
        return None

    return TranscriptEvent(
        text=text,
        is_final=bool(data.get("is_final", False)),
        start=_as_seconds(utterance.get("start")),
        end=_as_seconds(utterance.get("end")),
    )


__all__ = [
    "build_audio_chunk_frame",
    "build_session_request",
    "build_stop_frame",
    "encode_audio_chunk",
    "parse_transcript_frame",
]
