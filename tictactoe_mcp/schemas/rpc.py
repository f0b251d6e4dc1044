from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"

# Newest first; the first entry is offered when the client asks for an unknown version
SUPPORTED_PROTOCOL_VERSIONS = ("2025-06-18", "2025-03-26", "2024-11-05")
LATEST_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[0]


class Method(str, Enum):
    """JSON-RPC methods understood by the server."""

    INITIALIZE = "initialize"
    INITIALIZED = "notifications/initialized"
    PING = "ping"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"


class ToolName(str, Enum):
    """Tools exposed to remote callers."""

    NEW_GAME = "new_game"
    MAKE_MOVE = "make_move"
    GET_BOARD = "get_board"
    GET_STATUS = "get_status"
    RESET_GAME = "reset_game"
    DELETE_GAME = "delete_game"
    GET_AVAILABLE_MOVES = "get_available_moves"
    ANALYZE_POSITION = "analyze_position"
    LIST_GAMES = "list_games"


class JSONRPCErrorCode:
    """Standard JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class JSONRPCRequest(BaseModel):
    """Request or notification sent by the client.

    A message without an ``id`` member is a notification and gets no reply.
    """

    jsonrpc: Literal["2.0"]
    id: int | str | None = None
    method: str
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class JSONRPCError(BaseModel):
    code: int
    message: str
    data: Any | None = None


class JSONRPCResponse(BaseModel):
    """Reply to a request: exactly one of ``result`` or ``error`` is set."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: int | str | None = None
    result: dict[str, Any] | None = None
    error: JSONRPCError | None = None

    def to_wire(self) -> dict[str, Any]:
        message: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            message["error"] = self.error.model_dump(exclude_none=True)
        else:
            message["result"] = self.result if self.result is not None else {}
        return message

    @classmethod
    def success(cls, request_id: int | str | None, result: dict[str, Any]) -> JSONRPCResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls,
        request_id: int | str | None,
        code: int,
        message: str,
        data: Any | None = None,
    ) -> JSONRPCResponse:
        return cls(id=request_id, error=JSONRPCError(code=code, message=message, data=data))


# --- Tool payload schemas ---


class TextContent(BaseModel):
    """A block of text returned by a tool."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result of a tools/call request.

    Tool-level failures (bad arguments, illegal moves) are reported with
    ``is_error`` set rather than as JSON-RPC errors.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(False, alias="isError")

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)


class ToolDefinition(BaseModel):
    """Entry in the tools/list response."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(..., alias="inputSchema")


class CallToolParams(BaseModel):
    """Params of a tools/call request.

    ``arguments`` is left untyped so a malformed value can be reported by
    the tool instead of failing the whole request.
    """

    name: str
    arguments: Any = None


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    """Payload for the initialize response."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(..., alias="protocolVersion")
    capabilities: dict[str, Any]
    server_info: ServerInfo = Field(..., alias="serverInfo")
