"""Diagnostic preview bounds for the message inspector."""

from __future__ import annotations

# Binary payloads are previewed as hex of their first bytes.
INSPECT_HEX_PREVIEW_BYTES: int = 100

# Printable payloads are previewed as their first characters.
INSPECT_TEXT_PREVIEW_CHARS: int = 500

INSPECT_TRUNCATION_MARKER = "..."

__all__ = [
    "INSPECT_HEX_PREVIEW_BYTES",
    "INSPECT_TEXT_PREVIEW_CHARS",
    "INSPECT_TRUNCATION_MARKER",
]
