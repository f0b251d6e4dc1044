"""Streamable HTTP transport: one JSON-RPC message per POST."""

import json
import logging
from collections.abc import AsyncIterator
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, StreamingResponse

from tictactoe_mcp.dependencies.server import get_mcp_server
from tictactoe_mcp.server import TicTacToeServer, format_sse, parse_error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mcp"])

EVENT_STREAM = "text/event-stream"
APPLICATION_JSON = "application/json"


def wants_event_stream(accept: str) -> bool:
    """True when the client accepts an event stream but not plain JSON."""
    accepted = {part.split(";")[0].strip().lower() for part in accept.split(",")}
    return EVENT_STREAM in accepted and APPLICATION_JSON not in accepted


async def _single_event(message: Any) -> AsyncIterator[str]:
    yield format_sse("message", json.dumps(message, ensure_ascii=False))


@router.post("/mcp")
async def mcp_endpoint(
    request: Request,
    server: Annotated[TicTacToeServer, Depends(get_mcp_server)],
) -> Response:
    """Handle a JSON-RPC message posted by the client.

    Replies with JSON, or with a one-event stream when the client only
    accepts ``text/event-stream``. Notifications get ``202 Accepted``.
    """
    body = await request.body()
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Invalid JSON posted to /mcp")
        return JSONResponse(parse_error_response(), status_code=status.HTTP_400_BAD_REQUEST)

    response = await server.handle_message(data)
    if response is None:
        return Response(status_code=status.HTTP_202_ACCEPTED)

    if wants_event_stream(request.headers.get("accept", "")):
        return StreamingResponse(_single_event(response), media_type=EVENT_STREAM)
    return JSONResponse(response)
