"""Session bookkeeping for the legacy SSE transport.

A client opens ``GET /sse`` and receives an ``endpoint`` event naming the
URL to POST messages to. Responses to those POSTs are delivered as
``message`` events on the open stream.
"""

import asyncio
import json
import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import aclosing
from typing import Any

logger = logging.getLogger(__name__)

SESSION_ID_BYTES = 16
KEEPALIVE_INTERVAL = 15.0  # seconds

# Queued in place of a message to end a stream
_CLOSE = object()


def format_sse(event: str, data: str) -> str:
    """Encode one server-sent event."""
    return f"event: {event}\ndata: {data}\n\n"


class SseSessionManager:
    """Maps session IDs to the queues feeding their event streams."""

    def __init__(self, keepalive_interval: float = KEEPALIVE_INTERVAL):
        self._sessions: dict[str, asyncio.Queue] = {}
        self._keepalive_interval = keepalive_interval

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def create_session(self) -> str:
        session_id = secrets.token_hex(SESSION_ID_BYTES)
        self._sessions[session_id] = asyncio.Queue()
        logger.info("SSE session %s opened", session_id)
        return session_id

    def close_session(self, session_id: str) -> None:
        queue = self._sessions.pop(session_id, None)
        if queue is not None:
            queue.put_nowait(_CLOSE)
            logger.info("SSE session %s closed", session_id)

    async def send(self, session_id: str, message: Any) -> bool:
        """Queue a JSON-RPC message for a session.

        Returns:
            False if the session does not exist.
        """
        queue = self._sessions.get(session_id)
        if queue is None:
            return False
        await queue.put(message)
        return True

    async def stream(self, session_id: str, endpoint: str) -> AsyncIterator[str]:
        """Yield encoded events for a session until it is closed."""
        queue = self._sessions.get(session_id)
        if queue is None:
            return

        yield format_sse("endpoint", f"{endpoint}?session_id={session_id}")
        try:
            while True:
                try:
                    message = await asyncio.wait_for(queue.get(), timeout=self._keepalive_interval)
                except TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                if message is _CLOSE:
                    break
                yield format_sse("message", json.dumps(message, ensure_ascii=False))
        finally:
            self._sessions.pop(session_id, None)
            logger.debug("SSE stream for session %s finished", session_id)

    async def connect(self, endpoint: str) -> AsyncIterator[str]:
        """Open a session when the first event is pulled and stream it.

        A client that goes away before the stream starts never registers a
        session.
        """
        session_id = self.create_session()
        async with aclosing(self.stream(session_id, endpoint)) as events:
            async for event in events:
                yield event

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close_session(session_id)
