# =============================================================================
# core/schema.py  —  Capability Schema
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares, for each tool, its name, description and the exact shape of the
#   arguments the model may supply.  The same declaration is used twice:
#     1. to ADVERTISE the tool to the model (agent/home_agent.py, MCP server)
#     2. to VALIDATE an inbound call before any handler runs
#
# VALIDATION RULES:
#   - A required field that is missing is rejected.
#   - A field with the wrong primitive type is rejected.  Booleans are not
#     numbers and numeric strings ("23") are not numbers.
#   - Numbers must be finite.  No bounds are imposed on temperatures.
#   - Fields the schema does not declare are ignored, not rejected.
#
# TAGGED ARGUMENT TYPES:
#   validate() never hands a handler a loose dict.  It returns an instance of
#   the tool's own frozen dataclass (WeatherArgs, SetRoomTemperatureArgs, ...)
#   so each handler receives exactly the fields it declared.
# =============================================================================

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from core.errors import SchemaValidationError, UnknownTool
from core.models import is_number


_JSON_TYPES = ("string", "number", "integer", "boolean")


@dataclass(frozen=True)
class Param:
    """One declared parameter: wire name, primitive type, description."""

    name: str                      # Name on the wire, e.g. "roomName"
    type: str                      # One of _JSON_TYPES
    description: str
    required: bool = True
    attribute: str | None = None   # Dataclass field name when it differs from `name`

    def __post_init__(self):
        if self.type not in _JSON_TYPES:
            raise ValueError(f"unsupported parameter type: {self.type}")

    @property
    def field_name(self) -> str:
        return self.attribute or self.name

    def accepts(self, value: Any) -> bool:
        if self.type == "string":
            return isinstance(value, str)
        if self.type == "number":
            return is_number(value)
        if self.type == "integer":
            return is_number(value) and float(value).is_integer()
        return isinstance(value, bool)


@dataclass(frozen=True)
class ToolSchema:
    name: str
    description: str
    params: tuple[Param, ...]
    arguments_type: type

    def validate(self, raw: Any) -> Any:
        """Check raw arguments and build this tool's typed argument object.

        Args:
            raw: A mapping, a JSON object string, or None (no arguments).

        Raises:
            SchemaValidationError: listing every problem found, one per field.
        """
        arguments = _coerce_mapping(self.name, raw)

        problems: list[str] = []
        values: dict[str, Any] = {}
        for param in self.params:
            if param.name not in arguments or arguments[param.name] is None:
                if param.required:
                    problems.append(f"missing required field '{param.name}'")
                continue
            value = arguments[param.name]
            if not param.accepts(value):
                problems.append(
                    f"field '{param.name}' must be a {_describe(param.type)}, "
                    f"got {type(value).__name__}"
                )
                continue
            values[param.field_name] = value

        if problems:
            raise SchemaValidationError(self.name, problems)
        return self.arguments_type(**values)

    def to_json_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                p.name: {"type": p.type, "description": p.description}
                for p in self.params
            },
            "required": [p.name for p in self.params if p.required],
        }


def _coerce_mapping(tool_name: str, raw: Any) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw or "{}")
        except json.JSONDecodeError as e:
            raise SchemaValidationError(tool_name, [f"arguments are not valid JSON ({e.msg})"])
    if not isinstance(raw, Mapping):
        raise SchemaValidationError(tool_name, ["arguments must be an object"])
    return raw


def _describe(json_type: str) -> str:
    return {
        "string": "string",
        "number": "finite number",
        "integer": "whole number",
        "boolean": "boolean",
    }[json_type]


# =============================================================================
# Argument types — one frozen dataclass per tool
# =============================================================================
@dataclass(frozen=True)
class WeatherArgs:
    location: str


@dataclass(frozen=True)
class SearchWebArgs:
    query: str


@dataclass(frozen=True)
class GetRoomTemperaturesArgs:
    pass


@dataclass(frozen=True)
class SetRoomTemperatureArgs:
    room_name: str
    temperature: float


# =============================================================================
# The built-in tool schemas
# =============================================================================
WEATHER = ToolSchema(
    name="weather",
    description="Get the weather in a location",
    params=(
        Param("location", "string", "The location to get the weather for"),
    ),
    arguments_type=WeatherArgs,
)

SEARCH_WEB = ToolSchema(
    name="searchWeb",
    description="Search the web for current information on a topic using Brave Search",
    params=(
        Param("query", "string", "The search query to look up"),
    ),
    arguments_type=SearchWebArgs,
)

GET_ROOM_TEMPERATURES = ToolSchema(
    name="getRoomTemperatures",
    description="Get the current temperature of all rooms in the house",
    params=(),
    arguments_type=GetRoomTemperaturesArgs,
)

SET_ROOM_TEMPERATURE = ToolSchema(
    name="setRoomTemperature",
    description="Set the temperature for a specific room in the house",
    params=(
        Param("roomName", "string", "The name of the room to set the temperature for",
              attribute="room_name"),
        Param("temperature", "number", "The temperature to set in Celsius"),
    ),
    arguments_type=SetRoomTemperatureArgs,
)

SCHEMAS: dict[str, ToolSchema] = {
    schema.name: schema
    for schema in (WEATHER, SEARCH_WEB, GET_ROOM_TEMPERATURES, SET_ROOM_TEMPERATURE)
}


def validate(tool_name: str, raw: Any) -> Any:
    """Validate raw arguments against one of the built-in schemas."""
    schema = SCHEMAS.get(tool_name)
    if schema is None:
        raise UnknownTool(tool_name)
    return schema.validate(raw)
