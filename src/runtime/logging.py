"""Logging initialization."""

from __future__ import annotations

import os
import logging

from src.config.logging import LOG_FORMAT, ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL

from . import third_party_log_filters


def configure_logging() -> None:
    level = (os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    third_party_log_filters.configure()


__all__ = ["configure_logging"]
