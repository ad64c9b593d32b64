"""
Tests for the FastMCP surface, using FastMCP's in-memory client.
"""

import json

import pytest
from fastmcp import Client

from tools.mcp_server import create_mcp_server


class TestMcpServer:
    """Tests for create_mcp_server."""

    @pytest.mark.asyncio
    async def test_lists_all_tools(self, dispatcher):
        """Every registry tool is published under its wire name."""
        async with Client(create_mcp_server(dispatcher)) as client:
            tools = await client.list_tools()

        assert {tool.name for tool in tools} == set(dispatcher.registry.names())

    @pytest.mark.asyncio
    async def test_set_then_get_through_mcp(self, dispatcher):
        """MCP calls share the dispatcher's validation, wording and store."""
        async with Client(create_mcp_server(dispatcher)) as client:
            changed = await client.call_tool("setRoomTemperature", {"roomName": "bedroom", "temperature": 20})
            report = await client.call_tool("getRoomTemperatures", {})

        assert changed.content[0].text == "Temperature in Bedroom has been changed from 18°C to 20°C."
        assert "Bedroom: 20°C" in report.content[0].text

    @pytest.mark.asyncio
    async def test_input_schema_is_the_capability_schema(self, dispatcher):
        """Published input schemas come from the registry, not from Python signatures."""
        async with Client(create_mcp_server(dispatcher)) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        schema = tools["setRoomTemperature"].input_schema
        assert schema["required"] == ["roomName", "temperature"]
        assert schema["properties"]["temperature"]["type"] == "number"

    @pytest.mark.asyncio
    async def test_string_temperature_matches_direct_path(self, dispatcher, rooms_file):
        """A string temperature is rejected with the dispatcher's wording and nothing is written."""
        arguments = {"roomName": "Bedroom", "temperature": "23"}
        direct = await dispatcher.invoke("setRoomTemperature", arguments)

        async with Client(create_mcp_server(dispatcher)) as client:
            result = await client.call_tool("setRoomTemperature", arguments)

        assert result.content[0].text == direct
        assert direct.startswith("Invalid arguments for setRoomTemperature:")
        assert json.loads(rooms_file.read_text())["house"]["rooms"][1]["temperature"] == 18

    @pytest.mark.asyncio
    async def test_missing_field_matches_direct_path(self, dispatcher):
        """A missing argument yields the dispatcher's text rather than a protocol error."""
        direct = await dispatcher.invoke("weather", {})

        async with Client(create_mcp_server(dispatcher)) as client:
            result = await client.call_tool("weather", {})

        assert not result.is_error
        assert result.content[0].text == direct
        assert "missing required field 'location'" in direct

    @pytest.mark.asyncio
    async def test_integer_temperature_stays_integer(self, dispatcher, rooms_file):
        """Arguments reach the store without coercion."""
        async with Client(create_mcp_server(dispatcher)) as client:
            await client.call_tool("setRoomTemperature", {"roomName": "Bedroom", "temperature": 23})

        assert json.loads(rooms_file.read_text())["house"]["rooms"][1]["temperature"] == 23
        assert "23.0" not in rooms_file.read_text()
