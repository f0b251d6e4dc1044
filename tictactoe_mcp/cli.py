"""Command-line entry point: pick a transport and serve."""

import argparse
import asyncio
import logging
import sys

import uvicorn

from tictactoe_mcp.config import Settings, Transport, configure_logging, get_settings
from tictactoe_mcp.main import create_app
from tictactoe_mcp.server import TicTacToeServer, serve_stdio

logger = logging.getLogger(__name__)


def parse_addr(addr: str, default_host: str = "0.0.0.0") -> tuple[str, int]:
    """Split ``host:port`` (host optional, e.g. ``:8080``).

    Raises:
        ValueError: If the port is missing or not a number.
    """
    host, sep, port_text = addr.rpartition(":")
    if not sep:
        raise ValueError(f"address must look like host:port, got {addr!r}")
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"invalid port in address {addr!r}") from None
    if not 1 <= port <= 65535:
        raise ValueError(f"port out of range in address {addr!r}")
    return host or default_host, port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tic-Tac-Toe game server")
    parser.add_argument(
        "--transport",
        choices=[t.value for t in Transport],
        default=None,
        help="Transport method: stdio, sse, or http (default: TRANSPORT setting, stdio)",
    )
    parser.add_argument(
        "--addr",
        default=None,
        help="Address to listen on for sse/http transport (default: :8080)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def resolve_settings(args: argparse.Namespace, settings: Settings) -> Settings:
    """Apply command-line overrides on top of loaded settings."""
    update: dict = {}
    if args.transport is not None:
        update["TRANSPORT"] = Transport(args.transport)
    if args.addr is not None:
        host, port = parse_addr(args.addr, default_host=settings.HOST)
        update["HOST"] = host
        update["PORT"] = port
    if args.debug:
        update["DEBUG"] = True
    return settings.model_copy(update=update) if update else settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = resolve_settings(args, get_settings())
    except ValueError as e:
        parser.error(str(e))

    configure_logging(settings.DEBUG, stream=sys.stderr)
    logger.info("Starting Tic-Tac-Toe server with %s transport", settings.TRANSPORT.value)

    server = TicTacToeServer(settings=settings)

    if settings.TRANSPORT == Transport.STDIO:
        try:
            asyncio.run(serve_stdio(server))
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down")
        return 0

    app = create_app(server, transports=[settings.TRANSPORT])
    logger.info(
        "Serving %s transport on %s",
        settings.TRANSPORT.value,
        settings.bind_address,
    )
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )
    return 0
