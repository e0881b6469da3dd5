# ABOUTME: End-to-end tests of the MCP server through an in-memory client session.
# ABOUTME: Checks tool advertisement, successful calls and error reporting over the protocol.

import pytest
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND

from ipma_mcp.config import SERVER_NAME
from ipma_mcp.deps import IpmaDeps
from ipma_mcp.server import build_server, initialization_options
from ipma_payloads import LOCATIONS


class TestServer:
    def test_initialization_options(self, make_client):
        app = build_server(IpmaDeps(http_client=make_client({})))
        options = initialization_options(app)

        assert options.server_name == SERVER_NAME
        assert options.server_version == "1.0.0"
        assert options.capabilities.tools is not None

    @pytest.mark.asyncio
    async def test_lists_tools_with_schemas(self, make_client):
        """The client sees all six tools with the parameter-model schemas.

        Implementation: Lists tools through a connected in-memory session.
        Passing implies: The tool table is what the server advertises.
        """
        app = build_server(IpmaDeps(http_client=make_client({})))
        async with create_connected_server_and_client_session(app) as session:
            result = await session.list_tools()

        tools = {tool.name: tool for tool in result.tools}
        assert len(tools) == 6
        assert tools["get_weather_forecast"].inputSchema["required"] == ["city"]
        assert tools["get_uv_forecast"].description == "Obter previsão do índice UV"

    @pytest.mark.asyncio
    async def test_call_returns_text_content(self, make_client):
        app = build_server(IpmaDeps(http_client=make_client({"/distrits-islands.json": LOCATIONS})))
        async with create_connected_server_and_client_session(app) as session:
            result = await session.call_tool("get_locations", {})

        assert not result.isError
        assert result.content[0].type == "text"
        assert "**Região 11:**" in result.content[0].text

    @pytest.mark.asyncio
    async def test_unknown_tool_is_method_not_found(self, make_client):
        """Calling a tool that does not exist yields a protocol error with its code.

        Implementation: Calls "get_tides" through the session.
        Passing implies: MethodNotFound reaches the client as a JSON-RPC error, not as text.
        """
        client = make_client({})
        app = build_server(IpmaDeps(http_client=client))
        async with create_connected_server_and_client_session(app) as session:
            with pytest.raises(McpError) as exc_info:
                await session.call_tool("get_tides", {})

        assert exc_info.value.error.code == METHOD_NOT_FOUND
        assert exc_info.value.error.message == "Tool get_tides not found"
        client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_city_is_invalid_params_without_fetching(self, make_client):
        client = make_client({"/distrits-islands.json": LOCATIONS})
        app = build_server(IpmaDeps(http_client=client))
        async with create_connected_server_and_client_session(app) as session:
            with pytest.raises(McpError) as exc_info:
                await session.call_tool("get_weather_forecast", {})

        assert exc_info.value.error.code == INVALID_PARAMS
        assert exc_info.value.error.message == "City parameter is required"
        client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_failure_is_internal_error(self, make_client):
        client = make_client({})
        app = build_server(IpmaDeps(http_client=client))
        async with create_connected_server_and_client_session(app) as session:
            with pytest.raises(McpError) as exc_info:
                await session.call_tool("get_weather_warnings", {})

        assert exc_info.value.error.code == INTERNAL_ERROR
        assert exc_info.value.error.message.startswith("Erro ao obter avisos")
