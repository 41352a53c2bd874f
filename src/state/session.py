"""Upstream transcription session state."""

from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    INACTIVE = "inactive"
    STARTING = "starting"
    ACTIVE = "active"


__all__ = ["SessionState"]
