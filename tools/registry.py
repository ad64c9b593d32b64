# =============================================================================
# tools/registry.py  —  Tool Registry & Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The single point through which the conversational session reaches every
#   side-effecting capability.
#
# HOW A CALL FLOWS (Dispatcher.invoke):
#   1. Look the tool name up in the registry.  An unknown name raises
#      UnknownTool: the session should only ever echo tools it was given.
#   2. Validate the raw arguments against the tool's schema.  Bad arguments
#      come back as "Invalid arguments for <tool>: ..." text.
#   3. Await the handler.  Anything it raises becomes
#      "Error <doing X>: <message>" text.
#   4. Return the text verbatim.  How it is spoken is the transport's job.
#
# LOGGING:
#   Every call is logged with colour-coded lines on stderr:
#     - CYAN for incoming requests (tool name + parameters)
#     - YELLOW for status (validation failures, handler errors)
#     - GREEN for the text handed back
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator

from core.errors import SchemaValidationError, ToolError, UnknownTool
from core.models import ToolResult
from core.schema import ToolSchema

logger = logging.getLogger(__name__)

# ANSI color codes for terminal output
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_MAX_LOGGED_RESPONSE = 300

Handler = Callable[[Any], Awaitable[ToolResult]]


def _log_request(tool_name: str, params: Any) -> None:
    if isinstance(params, dict):
        param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    else:
        param_str = repr(params)
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    shown = text if len(text) <= _MAX_LOGGED_RESPONSE else text[:_MAX_LOGGED_RESPONSE] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {shown!r}{_RESET}")
    return text


@dataclass(frozen=True)
class ToolDescriptor:
    """A named tool: its schema, its handler, and how to phrase its errors."""

    schema: ToolSchema
    handler: Handler
    action: str                    # e.g. "setting room temperature"

    @property
    def name(self) -> str:
        return self.schema.name

    @property
    def description(self) -> str:
        return self.schema.description


class ToolRegistry:
    """Name -> ToolDescriptor.  Built once at startup, read-only afterwards."""

    def __init__(self, tools: list[ToolDescriptor] | None = None):
        self._tools: dict[str, ToolDescriptor] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: ToolDescriptor) -> None:
        if tool.name in self._tools:
            raise ValueError(f"tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> ToolDescriptor:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownTool(name) from None

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


class Dispatcher:
    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def invoke(self, tool_name: str, raw_arguments: Any = None) -> str:
        """Run one tool call and return the text to insert into the conversation.

        Raises:
            UnknownTool: if `tool_name` is not registered.  Every other
                failure is returned as text.
        """
        _log_request(tool_name, raw_arguments)
        tool = self.registry.get(tool_name)

        try:
            arguments = tool.schema.validate(raw_arguments)
        except SchemaValidationError as e:
            _log_status(f"rejected arguments: {e}")
            return _log_response(tool_name, f"Invalid arguments for {tool_name}: {e}")

        try:
            result = await tool.handler(arguments)
        except Exception as e:
            if isinstance(e, ToolError):
                _log_status(f"{type(e).__name__}: {e}")
            else:
                logger.exception("Unexpected failure in tool %s", tool_name)
            message = str(e) or type(e).__name__
            return _log_response(tool_name, f"Error {tool.action}: {message}")

        if not result.ok:
            _log_status(f"handler reported failure: {result.text}")
        return _log_response(tool_name, result.text)
