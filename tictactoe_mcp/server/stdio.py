"""Line-oriented stdio transport: one JSON-RPC message per line."""

import asyncio
import json
import logging
import sys
from typing import IO, Any, TextIO

from .protocol import TicTacToeServer, parse_error_response

logger = logging.getLogger(__name__)

MAX_MESSAGE_SIZE = 1024 * 1024  # 1 MB per line


def _write_message(stdout: TextIO, message: Any) -> None:
    stdout.write(json.dumps(message, ensure_ascii=False) + "\n")
    stdout.flush()


def _as_bytes(chunk: bytes | str) -> bytes:
    if isinstance(chunk, bytes):
        return chunk
    # Text streams may carry surrogate-escaped bytes from a non-UTF-8 stdin
    return chunk.encode("utf-8", errors="surrogatepass")


def _read_line(source: IO) -> bytes:
    """Read one line of at most MAX_MESSAGE_SIZE + 1 bytes."""
    return _as_bytes(source.readline(MAX_MESSAGE_SIZE + 1))


def _discard_rest_of_line(source: IO) -> None:
    while True:
        chunk = _as_bytes(source.readline(MAX_MESSAGE_SIZE + 1))
        if not chunk or chunk.endswith(b"\n"):
            return


async def serve_stdio(
    server: TicTacToeServer,
    stdin: IO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Serve requests read from stdin until EOF.

    Lines are read as bytes when the stream exposes a binary buffer and
    decoded leniently, so undecodable input is answered with a parse error
    instead of stopping the server. Responses are written to stdout, one
    per line. Nothing else may be written to stdout while serving.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    source = getattr(stdin, "buffer", stdin)
    logger.info("Starting Tic-Tac-Toe server with stdio transport...")

    while True:
        raw_line = await asyncio.to_thread(_read_line, source)
        if not raw_line:
            logger.info("stdin closed, stopping stdio transport")
            break

        if len(raw_line.rstrip(b"\r\n")) > MAX_MESSAGE_SIZE:
            logger.warning("Message too large (max %d bytes), discarding line", MAX_MESSAGE_SIZE)
            if not raw_line.endswith(b"\n"):
                await asyncio.to_thread(_discard_rest_of_line, source)
            _write_message(stdout, parse_error_response())
            continue

        raw_text = raw_line.decode("utf-8", errors="replace").strip()
        if not raw_text:
            continue

        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError:
            logger.warning("Invalid JSON on stdin")
            _write_message(stdout, parse_error_response())
            continue

        response = await server.handle_message(data)
        if response is not None:
            _write_message(stdout, response)
