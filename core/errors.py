# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure a tool can hit has a named type here.  Handlers raise them;
# the dispatcher (tools/registry.py) catches them at its boundary and turns
# them into text for the model.  No exception from this list is ever allowed
# to reach the conversational session.
# =============================================================================

from __future__ import annotations


class ToolError(Exception):
    """Base class for everything a tool invocation can fail with."""


class SchemaValidationError(ToolError):
    """Arguments do not match the tool's declared parameter shape."""

    def __init__(self, tool_name: str, problems: list[str]):
        self.tool_name = tool_name
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class RoomNotFound(ToolError):
    """No room matches the requested name (case-insensitively)."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = list(available)
        super().__init__(
            f'Room "{name}" not found. '
            f"Available rooms are: {', '.join(self.available)}"
        )


class StoreUnavailable(ToolError):
    """The rooms document is missing, unreadable, malformed, or unwritable."""


class UpstreamError(ToolError):
    """A third-party HTTP API answered with a failure (or not at all)."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


class MissingCredential(ToolError):
    """A required API key has not been configured."""


class UnknownTool(ToolError):
    """The dispatcher was asked for a tool that is not in its registry."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")
