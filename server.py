# server.py
"""
Main entry point for the Netrunner focus server.
Starts the terminal server, the focus ticker and (optionally) the HTTP API,
and handles graceful shutdown.
"""
import asyncio
import logging
from typing import Optional

import uvicorn

import config
from focus import ticker
from focus.registry import SessionRegistry
from focus.handlers.connection import ConnectionHandler
from admin_portal.backend.config import settings
from admin_portal.backend.main import create_app

# --- Logging Setup ---
log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
log_handlers = [
    logging.FileHandler("server.log"),
    logging.StreamHandler()
]
logging.basicConfig(
    level=logging.INFO,
    format=log_format,
    handlers=log_handlers
)
log = logging.getLogger(__name__)

# --- Global State ---
registry: Optional[SessionRegistry] = None
ACTIVE_TASKS = set()


async def handle_connection(reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
    """Coroutine called for each new terminal connection."""
    task = asyncio.current_task()
    ACTIVE_TASKS.add(task)
    task.add_done_callback(ACTIVE_TASKS.discard)

    addr = writer.get_extra_info('peername', 'Unknown Address')
    log.info("Connection received from %s", addr)

    if registry is None:
        log.error("Server not fully initialized. Refusing connection from %s.", addr)
        writer.close(); await writer.wait_closed()
        return

    handler = ConnectionHandler(reader, writer, registry)
    await handler.handle()

def _build_api_server(session_registry: SessionRegistry) -> uvicorn.Server:
    app = create_app(session_registry, manage_ticker=False)
    api_config = uvicorn.Config(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level,
    )
    return uvicorn.Server(api_config)

async def main():
    """Main server entry point."""
    global registry

    log.info("Starting Netrunner focus server...")
    registry = SessionRegistry()

    # 1. Start the ticker before any engine subscribes to it
    await ticker.start_ticker(config.TICKER_INTERVAL_SECONDS)

    # 2. Start the terminal server
    server = await asyncio.start_server(handle_connection, config.HOST, config.PORT)
    addr = server.sockets[0].getsockname()
    log.info(f"Terminal server listening on {addr[0]}:{addr[1]}")

    # 3. The HTTP API shares the registry and the event loop
    api_server = None
    api_task = None
    if settings.api_enabled:
        api_server = _build_api_server(registry)
        api_task = asyncio.create_task(api_server.serve(), name="FocusAPI")
        log.info("Focus API starting on %s:%d", settings.api_host, settings.api_port)

    try:
        await server.serve_forever()
    except asyncio.CancelledError:
        log.info("Main server task cancelled.")
    finally:
        log.info("Shutting down server...")
        server.close()
        await server.wait_closed()

        if api_server and api_task:
            api_server.should_exit = True
            await asyncio.gather(api_task, return_exceptions=True)

        # Let connection handlers run their cleanup before engines are stopped
        if ACTIVE_TASKS:
            log.info(f"Waiting for {len(ACTIVE_TASKS)} client tasks to complete cleanup...")
            for task in list(ACTIVE_TASKS):
                task.cancel()
            await asyncio.gather(*ACTIVE_TASKS, return_exceptions=True)

        registry.shutdown()
        await ticker.stop_ticker()
        log.info("Server shutdown complete.")

if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Server stopped manually.")
