"""Secrets and authentication configuration."""

from __future__ import annotations

ENV_GLADIA_API_KEY = "GLADIA_API_KEY"
ENV_MEETING_BAAS_API_KEY = "MEETING_BAAS_API_KEY"

# Header names expected by the upstream APIs.
GLADIA_KEY_HEADER = "x-gladia-key"
MEETING_BAAS_KEY_HEADER = "x-meeting-baas-api-key"

__all__ = [
    "ENV_GLADIA_API_KEY",
    "ENV_MEETING_BAAS_API_KEY",
    "GLADIA_KEY_HEADER",
    "MEETING_BAAS_KEY_HEADER",
]
