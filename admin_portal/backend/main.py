import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from focus import ticker
from focus.registry import SessionRegistry
from .config import settings
from .routers import sessions, focus_state

log = logging.getLogger(__name__)

def create_app(registry: Optional[SessionRegistry] = None, manage_ticker: bool = True) -> FastAPI:
    """
    Builds the focus API around a session registry.

    When the terminal server embeds this app it passes its own registry and
    runs the ticker itself (manage_ticker=False).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if manage_ticker:
            await ticker.start_ticker(config.TICKER_INTERVAL_SECONDS)
        log.info("Focus API ready (%d sessions)", len(app.state.registry))
        try:
            yield
        finally:
            if manage_ticker:
                app.state.registry.shutdown()
                await ticker.stop_ticker()
            log.info("Focus API stopped")

    app = FastAPI(
        title="Netrunner Focus API",
        description="Focus engine state and controls for connected operators",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.registry = registry if registry is not None else SessionRegistry()

    # CORS middleware for the browser status bar
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check
    @app.get("/")
    async def root():
        return {
            "status": "online",
            "service": "Netrunner Focus API",
            "version": "1.0.0",
            "sessions": len(app.state.registry),
            "ticker_running": ticker.is_running(),
        }

    app.include_router(sessions.router)
    app.include_router(focus_state.router)
    return app

app = create_app()
