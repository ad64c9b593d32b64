# =============================================================================
# agent/home_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the Google ADK agent for one session: the LLM (via LiteLlm), the
#   system instructions, and one ADK tool per entry in the ToolRegistry.
#
# HOW TOOLS REACH THE MODEL:
#
#   ToolRegistry ──▶ RegistryTool (ADK BaseTool) ──▶ FunctionDeclaration
#                          │                          (what the LLM sees)
#                          ▼
#                   on_tool_call(name, args)  ──▶ Dispatcher.invoke
#
#   RegistryTool does not run any handler itself.  ADK calls run_async() when
#   the model emits a function call, and RegistryTool forwards it to the
#   orchestrator's callback.  The declaration is derived from the same
#   ToolSchema the dispatcher validates against.
#
# MODEL STRING:
#   Settings.model, e.g. "openrouter/openai/gpt-4o".  LiteLlm reads the
#   provider key (OPENROUTER_API_KEY, OPENAI_API_KEY, ...) from the
#   environment.
# =============================================================================

from __future__ import annotations

from typing import Any, Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.base_tool import BaseTool
from google.adk.tools.tool_context import ToolContext
from google.genai import types

from core.config import DEFAULT_MODEL
from core.schema import ToolSchema
from tools.registry import ToolDescriptor, ToolRegistry

AGENT_NAME = "home_assistant"

_GENAI_TYPES = {
    "string": types.Type.STRING,
    "number": types.Type.NUMBER,
    "integer": types.Type.INTEGER,
    "boolean": types.Type.BOOLEAN,
}


def to_function_declaration(schema: ToolSchema) -> types.FunctionDeclaration:
    return types.FunctionDeclaration(
        name=schema.name,
        description=schema.description,
        parameters=types.Schema(
            type=types.Type.OBJECT,
            properties={
                p.name: types.Schema(type=_GENAI_TYPES[p.type], description=p.description)
                for p in schema.params
            },
            required=[p.name for p in schema.params if p.required],
        ),
    )


class RegistryTool(BaseTool):
    """Adapts one ToolDescriptor to ADK; execution goes to `on_tool_call`."""

    def __init__(self, descriptor: ToolDescriptor, on_tool_call):
        super().__init__(name=descriptor.name, description=descriptor.description)
        self.descriptor = descriptor
        self._on_tool_call = on_tool_call

    def _get_declaration(self) -> Optional[types.FunctionDeclaration]:
        return to_function_declaration(self.descriptor.schema)

    async def run_async(self, *, args: dict[str, Any], tool_context: ToolContext) -> Any:
        return await self._on_tool_call(self.name, args)


def create_agent(
    instructions: str,
    tools: ToolRegistry,
    on_tool_call,
    model: str = DEFAULT_MODEL,
) -> Agent:
    """Create the ADK agent for one session.

    Args:
        instructions: The fixed system instructions (agent/prompt.py).
        tools: Every tool the model may call this session.
        on_tool_call: async (name, args) -> str; normally
            SessionOrchestrator.handle_tool_call.
        model: LiteLlm model string.
    """
    return Agent(
        name=AGENT_NAME,
        model=LiteLlm(model=model),
        instruction=instructions,
        tools=[RegistryTool(descriptor, on_tool_call) for descriptor in tools],
    )
