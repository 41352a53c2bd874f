"""Shared error types for the transcription proxy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionStartError(Exception):
    """Raised when a Gladia live session cannot be created or opened."""

    reason: str

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class MeetingBotError(Exception):
    """Raised when the MeetingBaas API rejects a bot request."""

    status: int | None
    detail: str

    def __str__(self) -> str:
        if self.status is None:
            return self.detail
        return f"{self.status} - {self.detail}"


__all__ = ["MeetingBotError", "SessionStartError"]
