"""Protocol session and transport bindings.

Provides:
- JSON-RPC session (protocol.py)
- stdio transport (stdio.py)
- SSE session bookkeeping (sse.py); HTTP routes live in tictactoe_mcp.routers
"""

from .protocol import RequestError, TicTacToeServer, parse_error_response
from .sse import SseSessionManager, format_sse
from .stdio import serve_stdio

__all__ = [
    "RequestError",
    "SseSessionManager",
    "TicTacToeServer",
    "format_sse",
    "parse_error_response",
    "serve_stdio",
]
