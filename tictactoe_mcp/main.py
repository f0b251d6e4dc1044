import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tictactoe_mcp.config import Transport
from tictactoe_mcp.routers import mcp, sse
from tictactoe_mcp.server import SseSessionManager, TicTacToeServer

logger = logging.getLogger(__name__)


def create_app(
    server: TicTacToeServer | None = None,
    transports: Iterable[Transport] | None = None,
) -> FastAPI:
    """Build the HTTP app serving ``server``.

    Args:
        server: Protocol server to expose; a fresh one if omitted.
        transports: HTTP bindings to mount. Defaults to both streamable
            HTTP (``/mcp``) and legacy SSE (``/sse`` + ``/messages``).
    """
    server = server or TicTacToeServer()
    enabled = set(transports) if transports is not None else {Transport.HTTP, Transport.SSE}

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s", server.settings.SERVER_NAME)
        logger.debug("Enabled transports: %s", sorted(t.value for t in enabled))

        yield

        logger.info("Shutting down %s", server.settings.SERVER_NAME)
        sessions: SseSessionManager | None = getattr(app.state, "sse_sessions", None)
        if sessions is not None:
            sessions.close_all()
        logger.info("Active games at shutdown: %d", len(server.registry))

    app = FastAPI(
        title=server.settings.SERVER_NAME,
        version=server.settings.SERVER_VERSION,
        lifespan=lifespan,
    )
    app.state.mcp_server = server

    if Transport.HTTP in enabled:
        app.include_router(mcp.router)
        logger.debug("Router registered: /mcp")
    if Transport.SSE in enabled:
        app.state.sse_sessions = SseSessionManager()
        app.include_router(sse.router)
        logger.debug("Routers registered: /sse, /messages")

    @app.get("/")
    def root():
        info = server.server_info
        return {"name": info.name, "version": info.version}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app
