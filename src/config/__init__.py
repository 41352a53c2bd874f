"""Configuration module exports (env names and defaults only)."""

from .meeting import DEFAULT_BOT_NAME
from .websocket import WS_ENDPOINT_PATH, DEFAULT_PROXY_HOST, DEFAULT_PROXY_PORT

__all__ = [
    "DEFAULT_BOT_NAME",
    "DEFAULT_PROXY_HOST",
    "DEFAULT_PROXY_PORT",
    "WS_ENDPOINT_PATH",
]
