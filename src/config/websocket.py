"""Proxy WebSocket protocol configuration and constants."""

from __future__ import annotations

ENV_PROXY_HOST = "PROXY_HOST"
ENV_PROXY_PORT = "PROXY_PORT"
ENV_PROXY_DRAIN_TIMEOUT_S = "PROXY_DRAIN_TIMEOUT_S"

DEFAULT_PROXY_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PROXY_PORT = 8765
# Upper bound on how long shutdown waits for in-flight handlers to flush.
DEFAULT_PROXY_DRAIN_TIMEOUT_S = 5.0

# Bots and MeetingBaas both connect to the bare host:port.
WS_ENDPOINT_PATH = "/"

# Envelope keys
WS_KEY_TYPE = "type"
WS_KEY_DATA = "data"
WS_KEY_CLIENT = "client"

# Registration handshake: {"type": "register", "client": "bot"}
WS_REGISTER_TYPE = "register"
WS_REGISTER_CLIENT_BOT = "bot"

# Envelope message types
WS_TYPE_AUDIO = "audio"
WS_TYPE_TRANSCRIPTION = "transcription"
WS_TYPE_TEXT = "text"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_GOING_AWAY_REASON = "proxy shutting down"

__all__ = [
    "DEFAULT_PROXY_DRAIN_TIMEOUT_S",
    "DEFAULT_PROXY_HOST",
    "DEFAULT_PROXY_PORT",
    "ENV_PROXY_DRAIN_TIMEOUT_S",
    "ENV_PROXY_HOST",
    "ENV_PROXY_PORT",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_GOING_AWAY_REASON",
    "WS_CLOSE_NORMAL_CODE",
    "WS_ENDPOINT_PATH",
    "WS_KEY_CLIENT",
    "WS_KEY_DATA",
    "WS_KEY_TYPE",
    "WS_REGISTER_CLIENT_BOT",
    "WS_REGISTER_TYPE",
    "WS_TYPE_AUDIO",
    "WS_TYPE_TEXT",
    "WS_TYPE_TRANSCRIPTION",
]
