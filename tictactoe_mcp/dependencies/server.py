import logging

from fastapi import Request

from tictactoe_mcp.server import SseSessionManager, TicTacToeServer

logger = logging.getLogger(__name__)


def get_mcp_server(request: Request) -> TicTacToeServer:
    """The protocol server attached to the running app."""
    return request.app.state.mcp_server


def get_sse_sessions(request: Request) -> SseSessionManager:
    """SSE sessions of the running app; created on first use."""
    sessions = getattr(request.app.state, "sse_sessions", None)
    if sessions is None:
        logger.debug("Creating SSE session manager")
        sessions = SseSessionManager()
        request.app.state.sse_sessions = sessions
    return sessions
