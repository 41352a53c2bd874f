"""MeetingBaas bot lifecycle client (create a bot join, remove it)."""

from __future__ import annotations

import logging

import httpx
import orjson

from src.errors import MeetingBotError
from src.state.settings import MeetingBotSettings
from src.config.secrets import MEETING_BAAS_KEY_HEADER
from src.config.meeting import MEETING_BAAS_BOTS_PATH

logger = logging.getLogger(__name__)


class MeetingBotClient:
    def __init__(self, settings: MeetingBotSettings, *, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=settings.api_url, timeout=settings.timeout_s)
        self._bot_id: str | None = None
        logger.info("MeetingBaas client initialized with API URL: %s", settings.api_url)

    @property
    def bot_id(self) -> str | None:
        return self._bot_id

    def _headers(self) -> dict[str, str]:
        return {MEETING_BAAS_KEY_HEADER: self._settings.api_key}

    async def connect(self, meeting_url: str, bot_name: str, webhook_url: str | None = None) -> bool:
        """Ask MeetingBaas to send a bot into ``meeting_url``.

        ``webhook_url`` receives both platform events and the audio stream.
        Returns ``False`` (after logging) on any API or transport failure.
        """
        logger.info("Connecting to meeting: %s", meeting_url)
        try:
            self._bot_id = await self._create_bot(meeting_url, bot_name, webhook_url or None)
        except MeetingBotError as exc:
            logger.error("MeetingBaas API error: %s", exc)
            return False
        except httpx.HTTPError as exc:
            logger.error("Error connecting to meeting: %s", exc)
            return False
        logger.info("Bot created with ID: %s", self._bot_id)
        return True

    async def disconnect(self) -> None:
        bot_id = self._bot_id
        if bot_id is None:
            return
        self._bot_id = None
        try:
            response = await self._http.delete(f"{MEETING_BAAS_BOTS_PATH}/{bot_id}", headers=self._headers())
        except httpx.HTTPError as exc:
            logger.error("Error removing bot %s: %s", bot_id, exc)
            return
        if response.is_error:
            logger.error("Error removing bot %s: %s - %s", bot_id, response.status_code, response.text)
            return
        logger.info("Bot %s successfully removed", bot_id)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _create_bot(self, meeting_url: str, bot_name: str, webhook_url: str | None) -> str:
        body = {
            "bot_name": bot_name,
            "meeting_url": meeting_url,
            "reserved": False,
            "deduplication_key": bot_name,
            "webhook_url": webhook_url,
            "streaming": {"output": webhook_url},
        }
        response = await self._http.post(MEETING_BAAS_BOTS_PATH, json=body, headers=self._headers())
        if response.is_error:
            raise MeetingBotError(status=response.status_code, detail=response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise MeetingBotError(status=response.status_code, detail=f"invalid JSON response: {exc}") from exc
        logger.info("API Response: %s", orjson.dumps(data).decode("utf-8"))

        bot_id = data.get("bot_id") if isinstance(data, dict) else None
        if not bot_id:
            raise MeetingBotError(status=response.status_code, detail="No bot_id in response")
        return str(bot_id)


__all__ = ["MeetingBotClient"]
