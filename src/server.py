"""FastAPI server hosting the MeetingBaas ↔ Gladia transcription proxy."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from src.state import RuntimeDeps
from src.state.settings import AppSettings
from src.config.websocket import WS_ENDPOINT_PATH
from src.runtime.logging import configure_logging
from src.runtime.dependencies import build_runtime_deps
from src.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

DepsFactory = Callable[[AppSettings | None], Awaitable[RuntimeDeps]]


def create_app(*, settings: AppSettings | None = None, deps_factory: DepsFactory | None = None) -> FastAPI:
    factory = deps_factory or build_runtime_deps

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = await factory(settings)
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            await runtime_deps.shutdown()
            app.state.runtime_deps = None

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.websocket(WS_ENDPOINT_PATH)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        runtime_deps = getattr(app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, runtime_deps.proxy)

    return app


configure_logging()

app = create_app()

__all__ = ["app", "create_app"]
