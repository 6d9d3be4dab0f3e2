from __future__ import annotations

import logging

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from upsound_mcp.dispatch.dispatcher import RequestDispatcher, UnknownOperation
from upsound_mcp.tools.catalog import list_operations
from upsound_mcp.tools.model import Operation

log = logging.getLogger(__name__)

SERVER_NAME = "upsound"
SERVER_VERSION = "0.1.0"


def to_mcp_tool(operation: Operation) -> types.Tool:
    return types.Tool(name=operation.name, description=operation.description, inputSchema=operation.input_schema())


def build_server(dispatcher: RequestDispatcher) -> Server:
    # Raw handlers: the call_tool() decorator folds every raised error into an isError result.
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    async def handle_list_tools(_request: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=[to_mcp_tool(op) for op in list_operations()]))

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        try:
            envelope = await dispatcher.dispatch(request.params.name, request.params.arguments)
        except UnknownOperation as exc:
            raise McpError(types.ErrorData(code=types.METHOD_NOT_FOUND, message=str(exc))) from exc
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=envelope.text)],
                isError=envelope.is_error,
            )
        )

    server.request_handlers[types.ListToolsRequest] = handle_list_tools
    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve_stdio(dispatcher: RequestDispatcher) -> None:
    server = build_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        log.info("Upsound MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
