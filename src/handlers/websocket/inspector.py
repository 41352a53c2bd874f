"""Best-effort payload previews for diagnostic logging."""

from __future__ import annotations

import re
from typing import Any

import orjson

from src.config.limits import INSPECT_HEX_PREVIEW_BYTES, INSPECT_TRUNCATION_MARKER, INSPECT_TEXT_PREVIEW_CHARS

# Control or high-byte characters that suggest the payload is not text.
_BINARY_HINT = re.compile(r"[\x00-\x08\x0e-\x1f\x80-\xff]")

INSPECTION_FAILED = "[Inspection Error] Failed to inspect message"


def _pretty_json(value: Any) -> str:
    return orjson.dumps(value, option=orjson.OPT_INDENT_2).decode("utf-8")


def _text_preview(text: str) -> str:
    suffix = INSPECT_TRUNCATION_MARKER if len(text) > INSPECT_TEXT_PREVIEW_CHARS else ""
    return f"{text[:INSPECT_TEXT_PREVIEW_CHARS]}{suffix}"


def _hex_preview(data: bytes) -> str:
    suffix = INSPECT_TRUNCATION_MARKER if len(data) > INSPECT_HEX_PREVIEW_BYTES else ""
    return f"{data[:INSPECT_HEX_PREVIEW_BYTES].hex()}{suffix}"


def _inspect_bytes(data: bytes) -> str:
    try:
        return f"[Buffer as JSON] {_pretty_json(orjson.loads(data))}"
    except orjson.JSONDecodeError:
        pass

    text = data.decode("utf-8", errors="replace")
    # U+FFFD marks bytes that did not decode, which is binary as well.
    if "\ufffd" in text or _BINARY_HINT.search(text):
        return f"[Binary Buffer] {_hex_preview(data)}"
    return f"[String Buffer] {_text_preview(text)}"


def _inspect_text(text: str) -> str:
    try:
        return f"[String as JSON] {_pretty_json(orjson.loads(text))}"
    except orjson.JSONDecodeError:
        return f"[String] {_text_preview(text)}"


def inspect_message(payload: Any) -> str:
    """Describe ``payload`` for logs. Never raises."""
    try:
        if isinstance(payload, (bytes, bytearray, memoryview)):
            return _inspect_bytes(bytes(payload))
        if isinstance(payload, str):
            return _inspect_text(payload)
        return f"[{type(payload).__name__}] {_pretty_json(payload)}"
    except Exception:
        return INSPECTION_FAILED


__all__ = ["INSPECTION_FAILED", "inspect_message"]
