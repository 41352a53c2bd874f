"""Provider transcript events (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TranscriptEvent:
    text: str
    is_final: bool
    # Utterance offsets in seconds as reported by the provider.
    start: float = 0.0
    end: float = 0.0


__all__ = ["TranscriptEvent"]
