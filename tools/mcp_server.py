# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the same four tools the voice agent uses to any MCP client
#   (Claude Desktop, an ADK MCPToolset, the MCP inspector, ...).  Each MCP
#   tool is built from a registry entry: its input schema is the tool's own
#   ToolSchema.to_json_schema(), and the raw argument dict the client sends
#   is handed to Dispatcher.invoke untouched.  Validation, error wording and
#   logging are therefore identical on both surfaces.
#
# RUNNING THIS SERVER:
#     python -m tools.mcp_server
#   It speaks MCP over stdin/stdout, which is why logging goes to STDERR
#   (see core.config.configure_logging).  Anything printed to stdout would
#   corrupt the protocol stream.
#
# SHARED STATE:
#   The server owns one RoomTemperatureStore for its whole lifetime, so
#   concurrent MCP calls go through the same write lock.
# =============================================================================

from __future__ import annotations

from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.tools import Tool, ToolResult
from pydantic import Field
from pydantic.json_schema import SkipJsonSchema

from tools.registry import Dispatcher, ToolDescriptor

SERVER_NAME = "home-assistant-tools"


class DispatcherTool(Tool):
    """An MCP tool whose arguments go straight to the dispatcher."""

    dispatcher: Annotated[SkipJsonSchema[Any], Field(exclude=True)] = None

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: Dispatcher) -> "DispatcherTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.schema.to_json_schema(),
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        text = await self.dispatcher.invoke(self.name, arguments)
        return ToolResult(content=text)


def create_mcp_server(dispatcher: Dispatcher, name: str = SERVER_NAME) -> FastMCP:
    """Build a FastMCP server whose tools all route through `dispatcher`."""
    mcp = FastMCP(name)
    for descriptor in dispatcher.registry:
        mcp.add_tool(DispatcherTool.from_descriptor(descriptor, dispatcher))
    return mcp


def main() -> None:
    from dotenv import load_dotenv

    from core.config import Settings, configure_logging
    from tools.catalog import build_dispatcher

    load_dotenv()
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    create_mcp_server(build_dispatcher(settings)).run()


if __name__ == "__main__":
    main()
