"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from src.meeting.client import MeetingBotClient
    from src.state.settings import AppSettings
    from src.handlers.websocket.router import TranscriptionProxy
    from src.transcription.client import TranscriptionSessionClient


@dataclass(slots=True)
class RuntimeDeps:
    proxy: TranscriptionProxy
    session: TranscriptionSessionClient
    meeting: MeetingBotClient
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            await self.proxy.shutdown()
        except Exception:
            logger.exception("proxy shutdown failed")

        # Bot removal is best effort and must not hold up process exit.
        try:
            await asyncio.wait_for(self.meeting.disconnect(), timeout=self.settings.meeting.timeout_s)
        except TimeoutError:
            logger.error("Timed out removing the meeting bot")
        except Exception:
            logger.exception("meeting bot removal failed")

        for closer in (self.session.aclose, self.meeting.aclose):
            try:
                await closer()
            except Exception:
                logger.exception("client close failed")


__all__ = ["RuntimeDeps"]
