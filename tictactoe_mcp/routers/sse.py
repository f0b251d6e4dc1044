"""Legacy SSE transport: a long-lived event stream plus a POST endpoint."""

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse, StreamingResponse

from tictactoe_mcp.dependencies.server import get_mcp_server, get_sse_sessions
from tictactoe_mcp.server import SseSessionManager, TicTacToeServer, parse_error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sse"])

MESSAGES_PATH = "/messages"


@router.get("/sse")
async def sse_endpoint(
    sessions: Annotated[SseSessionManager, Depends(get_sse_sessions)],
) -> StreamingResponse:
    """Open an event stream. The first event tells the client where to POST."""
    return StreamingResponse(
        sessions.connect(MESSAGES_PATH),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.post(MESSAGES_PATH)
async def post_message(
    request: Request,
    server: Annotated[TicTacToeServer, Depends(get_mcp_server)],
    sessions: Annotated[SseSessionManager, Depends(get_sse_sessions)],
    session_id: str = Query(..., description="Session ID from the endpoint event"),
) -> Response:
    """Accept a JSON-RPC message; the reply is pushed onto the session stream."""
    if session_id not in sessions:
        logger.warning("Message posted for unknown SSE session %s", session_id)
        return JSONResponse(
            {"error": f"Unknown session: {session_id}"},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    body = await request.body()
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Invalid JSON posted to session %s", session_id)
        return JSONResponse(parse_error_response(), status_code=status.HTTP_400_BAD_REQUEST)

    response = await server.handle_message(data)
    if response is not None:
        await sessions.send(session_id, response)
    return Response(status_code=status.HTTP_202_ACCEPTED)
