"""
Unit tests for the capability schema.

Covers required fields, primitive type checks, the permissive policy for
undeclared fields, and the JSON schema advertised to clients.
"""

import math

import pytest

from core.errors import SchemaValidationError, UnknownTool
from core.schema import (
    GET_ROOM_TEMPERATURES,
    SCHEMAS,
    SET_ROOM_TEMPERATURE,
    GetRoomTemperaturesArgs,
    SetRoomTemperatureArgs,
    WeatherArgs,
    validate,
)


class TestValidate:
    """Tests for ToolSchema.validate and the module-level validate()."""

    def test_builds_tagged_arguments(self):
        """Valid arguments come back as the tool's own dataclass."""
        args = validate("setRoomTemperature", {"roomName": "Kitchen", "temperature": 23})

        assert args == SetRoomTemperatureArgs(room_name="Kitchen", temperature=23)

    def test_missing_required_field(self):
        """A missing required field is rejected and named."""
        with pytest.raises(SchemaValidationError) as exc_info:
            validate("weather", {})

        assert exc_info.value.tool_name == "weather"
        assert "location" in str(exc_info.value)

    def test_reports_every_problem(self):
        """All bad fields are reported together."""
        with pytest.raises(SchemaValidationError) as exc_info:
            SET_ROOM_TEMPERATURE.validate({"temperature": "warm"})

        assert len(exc_info.value.problems) == 2

    @pytest.mark.parametrize("bad", ["23", True, None, [23], math.inf, math.nan])
    def test_temperature_must_be_finite_number(self, bad):
        """Strings, booleans, lists and non-finite floats are not temperatures."""
        with pytest.raises(SchemaValidationError):
            SET_ROOM_TEMPERATURE.validate({"roomName": "Kitchen", "temperature": bad})

    @pytest.mark.parametrize("value", [-40, 0, 21.5, 1000])
    def test_no_numeric_bounds(self, value):
        """Any finite number is an acceptable temperature."""
        args = SET_ROOM_TEMPERATURE.validate({"roomName": "Kitchen", "temperature": value})

        assert args.temperature == value

    def test_extra_fields_ignored(self):
        """Undeclared fields are dropped rather than rejected."""
        args = validate("weather", {"location": "Oslo", "units": "metric"})

        assert args == WeatherArgs(location="Oslo")

    def test_accepts_json_string(self):
        """Arguments may arrive as a JSON-encoded object."""
        args = validate("weather", '{"location": "Oslo"}')

        assert args.location == "Oslo"

    def test_rejects_invalid_json(self):
        """Malformed JSON is a validation error, not a crash."""
        with pytest.raises(SchemaValidationError):
            validate("weather", "{location: Oslo")

    def test_rejects_non_object(self):
        """A JSON array is not an argument object."""
        with pytest.raises(SchemaValidationError):
            validate("weather", ["Oslo"])

    def test_no_parameters(self):
        """Tools without parameters accept None and empty input."""
        assert GET_ROOM_TEMPERATURES.validate(None) == GetRoomTemperaturesArgs()
        assert GET_ROOM_TEMPERATURES.validate("") == GetRoomTemperaturesArgs()

    def test_unknown_tool(self):
        """validate() on an undeclared name raises UnknownTool."""
        with pytest.raises(UnknownTool):
            validate("openGarageDoor", {})


class TestJsonSchema:
    """Tests for the schema advertised to clients."""

    def test_declared_tools(self):
        """The four tools are declared under their wire names."""
        assert set(SCHEMAS) == {"weather", "searchWeb", "getRoomTemperatures", "setRoomTemperature"}

    def test_set_room_temperature_shape(self):
        """setRoomTemperature advertises camelCase fields, both required."""
        schema = SET_ROOM_TEMPERATURE.to_json_schema()

        assert schema["properties"]["roomName"]["type"] == "string"
        assert schema["properties"]["temperature"]["type"] == "number"
        assert schema["required"] == ["roomName", "temperature"]
