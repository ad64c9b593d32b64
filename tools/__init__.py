# =============================================================================
# tools/__init__.py
# =============================================================================
# The gateway between a conversation and the home assistant's capabilities.
#
#   registry.py    ToolDescriptor, ToolRegistry and the Dispatcher that
#                  validates, invokes and converts every tool call to text
#   catalog.py     The four tools (weather, searchWeb, getRoomTemperatures,
#                  setRoomTemperature) bound to core/ logic
#   mcp_server.py  The same registry served over MCP with FastMCP
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT know about Google ADK (that's agent/)
#   - They do NOT touch files or HTTP directly (that's core/)
# =============================================================================
