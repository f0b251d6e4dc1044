"""Game service module.

Provides:
- Game engine (engine/): rules, position codec and the game registry
"""

# Re-export from engine for convenience
from .engine import (
    GameRegistry,
    InvalidPositionError,
    ProcessResult,
    format_position,
    parse_position,
)

__all__ = [
    "GameRegistry",
    "InvalidPositionError",
    "ProcessResult",
    "format_position",
    "parse_position",
]
