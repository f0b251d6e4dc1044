"""Tic-tac-toe game server speaking the JSON-RPC tools protocol."""

__version__ = "1.0.0"
