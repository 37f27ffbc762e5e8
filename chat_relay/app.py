from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .hub import ConnectionHub
from .relay import ChatRelay
from .routers import websockets as ws_router
from .settings import Settings

logger = logging.getLogger(__name__)


# Custom StaticFiles variant that disables caching for the client assets.
class NoCacheStaticFiles(StaticFiles):
    async def get_response(self, path: str, scope):  # type: ignore[override]
        response = await super().get_response(path, scope)
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response


def create_app(settings: Optional[Settings] = None, relay: Optional[ChatRelay] = None) -> FastAPI:
    """Build the ASGI app with its own hub, directory and relay."""
    settings = settings or Settings.from_env()

    app = FastAPI(title="Chat Relay")
    app.state.settings = settings
    app.state.relay = relay or ChatRelay(ConnectionHub())

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(ws_router.router)

    # Mount the client (index.html etc.) at root path, after the websocket route.
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", NoCacheStaticFiles(directory=settings.static_dir, html=True), name="public")
    elif settings.static_dir:
        logger.warning("Static directory %r not found; serving websocket only", settings.static_dir)

    return app


__all__ = ["create_app", "NoCacheStaticFiles"]
