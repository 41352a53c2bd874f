"""Log noise filters for third-party libraries.

Per-frame websocket debug output and per-request httpx lines drown out the
proxy's own logs, so they stay at WARNING unless explicitly enabled.
"""

from __future__ import annotations

import os
import logging

from src.config.logging import NOISY_LOGGERS, ENV_SHOW_THIRD_PARTY_LOGS


def configure() -> None:
    if (os.getenv(ENV_SHOW_THIRD_PARTY_LOGS) or "").strip().lower() in {"1", "true", "yes"}:
        return
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure"]
