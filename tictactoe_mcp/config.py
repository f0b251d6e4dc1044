import logging
import sys
from enum import Enum
from functools import lru_cache
from typing import TextIO

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tictactoe_mcp import __version__

logger = logging.getLogger(__name__)


class Transport(str, Enum):
    STDIO = "stdio"
    SSE = "sse"
    HTTP = "http"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server identity reported on initialize
    SERVER_NAME: str = "Tic-Tac-Toe Game Server"
    SERVER_VERSION: str = __version__

    # Transport selection
    TRANSPORT: Transport = Transport.STDIO
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # App config
    DEBUG: bool = False
    GAME_ID_PREFIX: str = "game-"

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("TRANSPORT", mode="before")
    @classmethod
    def normalize_transport(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def bind_address(self) -> str:
        return f"{self.HOST}:{self.PORT}"


def configure_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """Configure logging for the application.

    Logs go to stderr by default because the stdio transport owns stdout.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(stream or sys.stderr)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    logger.info("Settings loaded successfully")
    logger.debug("Transport: %s, bind address: %s", settings.TRANSPORT.value, settings.bind_address)
    return settings
