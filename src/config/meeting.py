"""MeetingBaas bot configuration (env names and defaults only)."""

from __future__ import annotations

ENV_MEETING_BAAS_API_URL = "MEETING_BAAS_API_URL"
ENV_MEETING_BAAS_TIMEOUT_S = "MEETING_BAAS_TIMEOUT_S"

DEFAULT_MEETING_BAAS_API_URL = "https://api.meetingbaas.com"
DEFAULT_MEETING_BAAS_TIMEOUT_S = 30.0
MEETING_BAAS_BOTS_PATH = "/bots"

DEFAULT_BOT_NAME = "Meeting Transcriber"

__all__ = [
    "DEFAULT_BOT_NAME",
    "DEFAULT_MEETING_BAAS_API_URL",
    "DEFAULT_MEETING_BAAS_TIMEOUT_S",
    "ENV_MEETING_BAAS_API_URL",
    "ENV_MEETING_BAAS_TIMEOUT_S",
    "MEETING_BAAS_BOTS_PATH",
]
