# ABOUTME: MCP stdio entry point exposing the IPMA tools to assistants.
# ABOUTME: Advertises the tool table, forwards calls to the dispatcher and maps ToolError to MCP errors.

import asyncio
import logging

import mcp.server.stdio
from mcp import types as mcp_types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.shared.exceptions import McpError

from ipma_mcp.config import SERVER_NAME, SERVER_VERSION
from ipma_mcp.deps import IpmaDeps, create_http_client
from ipma_mcp.errors import ToolError
from ipma_mcp.logging_config import configure_logging
from ipma_mcp.tools import TOOLS, dispatch

logger = logging.getLogger(__name__)


def build_server(deps: IpmaDeps) -> Server:
    """Create the MCP server with list/call handlers bound to `deps`."""
    app = Server(SERVER_NAME)

    @app.list_tools()
    async def list_tools() -> list[mcp_types.Tool]:
        """Advertise every tool in the table with its parameter schema."""
        return [
            mcp_types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in TOOLS.values()
        ]

    async def call_tool(req: mcp_types.CallToolRequest) -> mcp_types.ServerResult:
        """Run one tool call. A ToolError leaves as a JSON-RPC error carrying its code."""
        try:
            text = await dispatch(deps, req.params.name, req.params.arguments)
        except ToolError as e:
            raise McpError(mcp_types.ErrorData(code=e.code, message=e.message)) from e
        return mcp_types.ServerResult(
            mcp_types.CallToolResult(content=[mcp_types.TextContent(type="text", text=text)], isError=False)
        )

    # Bypasses @app.call_tool(), which turns raised errors into isError results
    app.request_handlers[mcp_types.CallToolRequest] = call_tool

    return app


def initialization_options(app: Server) -> InitializationOptions:
    """Server identity and capabilities sent during the MCP handshake."""
    return InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=app.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        ),
    )


async def run_stdio_server() -> None:
    """Serve tool calls over stdin/stdout until the client disconnects."""
    async with create_http_client() as http_client:
        app = build_server(IpmaDeps(http_client=http_client))
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            logger.info("IPMA MCP Server running on stdio")
            await app.run(read_stream, write_stream, initialization_options(app))


def main() -> None:
    """Console entry point: configure logging and serve until interrupted."""
    configure_logging()
    try:
        asyncio.run(run_stdio_server())
    except KeyboardInterrupt:
        logger.info("IPMA MCP Server stopped")


if __name__ == "__main__":
    main()
