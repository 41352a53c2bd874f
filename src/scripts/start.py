"""Start the proxy and send a MeetingBaas bot into a meeting.

Usage: python -m src.scripts.start <meeting_url> [bot_name] [webhook_url]
"""

from __future__ import annotations

import asyncio
import logging
import argparse
import contextlib

import uvicorn
from fastapi import FastAPI

from src.server import create_app
from src.state.settings import AppSettings
from src.config.meeting import DEFAULT_BOT_NAME
from src.runtime.logging import configure_logging
from src.runtime.settings import load_settings, missing_api_keys

logger = logging.getLogger(__name__)

STARTUP_POLL_S = 0.05


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Relay MeetingBaas audio to Gladia and transcripts back to a bot")
    p.add_argument("meeting_url", help="URL of the meeting the bot should join")
    p.add_argument("bot_name", nargs="?", default=DEFAULT_BOT_NAME, help="Display name of the bot")
    p.add_argument(
        "webhook_url",
        nargs="?",
        default="",
        help="URL MeetingBaas sends events and streams audio to (usually this proxy's public ws:// URL)",
    )
    p.add_argument("--host", default=None, help="Listen host (default: PROXY_HOST)")
    p.add_argument("--port", type=int, default=None, help="Listen port (default: PROXY_PORT)")
    return p.parse_args(argv)


async def _join_when_listening(server: uvicorn.Server, app: FastAPI, args: argparse.Namespace) -> None:
    while not server.started:
        if server.should_exit:
            return
        await asyncio.sleep(STARTUP_POLL_S)

    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        logger.error("Runtime dependencies missing after startup; not joining the meeting")
        return
    if await runtime_deps.meeting.connect(args.meeting_url, args.bot_name, args.webhook_url):
        logger.info("System initialized successfully")
    else:
        logger.error("MeetingBaas bot did not join %s; the proxy keeps serving", args.meeting_url)


async def run(args: argparse.Namespace, settings: AppSettings) -> int:
    app = create_app(settings=settings)
    config = uvicorn.Config(
        app,
        host=args.host or settings.proxy.host,
        port=args.port or settings.proxy.port,
        log_config=None,
        lifespan="on",
    )
    server = uvicorn.Server(config)
    logger.info("Proxy server starting on %s:%s", config.host, config.port)

    joiner = asyncio.create_task(_join_when_listening(server, app, args))
    try:
        # uvicorn traps SIGINT/SIGTERM, stops listening, then runs the lifespan teardown.
        await server.serve()
    finally:
        joiner.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await joiner
    return 0


def main(argv: list[str] | None = None) -> None:
    configure_logging()
    args = parse_args(argv)
    if not args.meeting_url.strip():
        logger.error("Please provide a meeting URL as the first argument")
        raise SystemExit(1)

    settings = load_settings()
    missing = missing_api_keys(settings)
    if missing:
        for name in missing:
            logger.error("%s is required", name)
        raise SystemExit(1)

    raise SystemExit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
