"""JSON-RPC session for the tools protocol.

Transport bindings hand every decoded message to
TicTacToeServer.handle_message() and write back whatever it returns.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from tictactoe_mcp.config import Settings, get_settings
from tictactoe_mcp.schemas.rpc import (
    LATEST_PROTOCOL_VERSION,
    SUPPORTED_PROTOCOL_VERSIONS,
    CallToolParams,
    InitializeResult,
    JSONRPCErrorCode,
    JSONRPCRequest,
    JSONRPCResponse,
    Method,
    ServerInfo,
)
from tictactoe_mcp.services.game.engine import GameRegistry
from tictactoe_mcp.services.tools import ToolContext, dispatch, has_tool, list_tool_definitions

logger = logging.getLogger(__name__)

MethodHandler = Callable[[JSONRPCRequest], Awaitable[dict[str, Any]]]


class RequestError(Exception):
    """Raised by a method handler to answer with a JSON-RPC error object."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def parse_error_response() -> dict[str, Any]:
    return JSONRPCResponse.failure(None, JSONRPCErrorCode.PARSE_ERROR, "Parse error").to_wire()


class TicTacToeServer:
    """Wraps a GameRegistry with the tools protocol.

    The registry is owned by the server instance; each server has its own
    set of games.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        registry: GameRegistry | None = None,
    ):
        self._settings = settings or get_settings()
        self.registry = registry or GameRegistry()
        self._methods: dict[str, MethodHandler] = {
            Method.INITIALIZE.value: self._initialize,
            Method.PING.value: self._ping,
            Method.TOOLS_LIST.value: self._tools_list,
            Method.TOOLS_CALL.value: self._tools_call,
        }
        logger.info(
            "%s %s initialized",
            self._settings.SERVER_NAME,
            self._settings.SERVER_VERSION,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def server_info(self) -> ServerInfo:
        return ServerInfo(name=self._settings.SERVER_NAME, version=self._settings.SERVER_VERSION)

    async def handle_message(self, message: Any) -> dict[str, Any] | list[dict[str, Any]] | None:
        """Handle one decoded JSON-RPC message or batch.

        Args:
            message: The JSON value received from the transport.

        Returns:
            The response object (or list for batches), or None when nothing
            should be sent back (notifications).
        """
        if isinstance(message, list):
            if not message:
                return JSONRPCResponse.failure(
                    None, JSONRPCErrorCode.INVALID_REQUEST, "Empty batch"
                ).to_wire()
            responses = [await self._handle_single(item) for item in message]
            replies = [response for response in responses if response is not None]
            return replies or None

        return await self._handle_single(message)

    async def _handle_single(self, data: Any) -> dict[str, Any] | None:
        try:
            request = JSONRPCRequest.model_validate(data)
        except ValidationError as e:
            request_id = data.get("id") if isinstance(data, dict) else None
            if not isinstance(request_id, (int, str)):
                request_id = None
            logger.warning("Invalid JSON-RPC request: %s", e.errors(include_url=False))
            return JSONRPCResponse.failure(
                request_id, JSONRPCErrorCode.INVALID_REQUEST, "Invalid Request"
            ).to_wire()

        if request.is_notification:
            if request.method == Method.INITIALIZED.value:
                logger.info("Client finished initialization")
            else:
                logger.debug("Notification received: %s", request.method)
            return None

        handler = self._methods.get(request.method)
        if handler is None:
            logger.debug("Method not found: %s", request.method)
            return JSONRPCResponse.failure(
                request.id,
                JSONRPCErrorCode.METHOD_NOT_FOUND,
                f"Method not found: {request.method}",
            ).to_wire()

        try:
            result = await handler(request)
        except RequestError as e:
            logger.warning("Request %s failed: %s", request.method, e.message)
            return JSONRPCResponse.failure(request.id, e.code, e.message).to_wire()
        except Exception:
            logger.exception("Unexpected error handling %s", request.method)
            return JSONRPCResponse.failure(
                request.id, JSONRPCErrorCode.INTERNAL_ERROR, "Internal error"
            ).to_wire()

        return JSONRPCResponse.success(request.id, result).to_wire()

    async def _initialize(self, request: JSONRPCRequest) -> dict[str, Any]:
        params = request.params or {}
        requested = params.get("protocolVersion")
        version = requested if requested in SUPPORTED_PROTOCOL_VERSIONS else LATEST_PROTOCOL_VERSION
        logger.info("Client initialized: requested=%s, negotiated=%s", requested, version)

        return InitializeResult(
            protocol_version=version,
            capabilities={"tools": {"listChanged": True}},
            server_info=self.server_info,
        ).model_dump(by_alias=True)

    async def _ping(self, request: JSONRPCRequest) -> dict[str, Any]:
        return {}

    async def _tools_list(self, request: JSONRPCRequest) -> dict[str, Any]:
        return {"tools": [d.model_dump(by_alias=True) for d in list_tool_definitions()]}

    async def _tools_call(self, request: JSONRPCRequest) -> dict[str, Any]:
        try:
            params = CallToolParams.model_validate(request.params or {})
        except ValidationError as e:
            raise RequestError(JSONRPCErrorCode.INVALID_PARAMS, "tools/call requires a tool name") from e

        if not has_tool(params.name):
            raise RequestError(JSONRPCErrorCode.INVALID_PARAMS, f"Unknown tool: {params.name}")

        arguments = params.arguments if isinstance(params.arguments, dict) else {}
        ctx = ToolContext(
            tool_name=params.name,
            arguments=arguments,
            registry=self.registry,
            game_id_prefix=self._settings.GAME_ID_PREFIX,
        )

        logger.debug("Calling tool %s with %s", params.name, arguments)
        result = await dispatch(ctx)
        if result is None:
            raise RequestError(JSONRPCErrorCode.INVALID_PARAMS, f"Unknown tool: {params.name}")

        logger.info("Tool %s completed: is_error=%s", params.name, result.is_error)
        return result.model_dump(by_alias=True)
