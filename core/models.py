# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# through the gateway: the rooms of the house, the persisted document that
# holds them, and the uniform result a tool hands back to the conversation.
#
# PERSISTED LAYOUT:
#   {
#     "house": {
#       "rooms": [
#         {"name": "Kitchen", "temperature": 21},
#         {"name": "Bedroom", "temperature": 18}
#       ]
#     }
#   }
#
#   The whole document is the unit of persistence.  There is no partial
#   update: House.to_document() always produces the complete thing.
# =============================================================================

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Union

from core.errors import StoreUnavailable


# -----------------------------------------------------------------------------
# Room — one named room and its current temperature
# -----------------------------------------------------------------------------
@dataclass
class Room:
    """A single room.  Identity is the name; lookups ignore case."""

    name: str
    temperature: float             # Degrees Celsius, no enforced range

    def matches(self, name: str) -> bool:
        return self.name.casefold() == name.casefold()


# -----------------------------------------------------------------------------
# House — the entire persisted document
# -----------------------------------------------------------------------------
@dataclass
class House:
    """Ordered collection of rooms; the unit the store reads and writes."""

    rooms: list[Room] = field(default_factory=list)

    def find(self, name: str) -> Room | None:
        for room in self.rooms:
            if room.matches(name):
                return room
        return None

    def room_names(self) -> list[str]:
        return [room.name for room in self.rooms]

    @classmethod
    def from_document(cls, document: Any) -> "House":
        """Parse and validate a loaded JSON document.

        Any structural problem is reported as StoreUnavailable so callers
        never see a KeyError or TypeError from malformed content.
        """
        if not isinstance(document, dict) or not isinstance(document.get("house"), dict):
            raise StoreUnavailable("rooms document has no 'house' object")

        raw_rooms = document["house"].get("rooms")
        if not isinstance(raw_rooms, list):
            raise StoreUnavailable("rooms document has no 'house.rooms' list")

        rooms: list[Room] = []
        seen: dict[str, str] = {}
        for index, entry in enumerate(raw_rooms):
            if not isinstance(entry, dict):
                raise StoreUnavailable(f"room #{index} is not an object")
            name = entry.get("name")
            temperature = entry.get("temperature")
            if not isinstance(name, str) or not name.strip():
                raise StoreUnavailable(f"room #{index} has no name")
            if not is_number(temperature):
                raise StoreUnavailable(f"room '{name}' has no numeric temperature")

            key = name.casefold()
            if key in seen:
                # Two rooms answering to the same name would make every
                # lookup ambiguous.
                raise StoreUnavailable(
                    f"duplicate room name '{name}' (conflicts with '{seen[key]}')"
                )
            seen[key] = name
            rooms.append(Room(name=name, temperature=temperature))

        return cls(rooms=rooms)

    def to_document(self) -> dict[str, Any]:
        return {
            "house": {
                "rooms": [
                    {"name": room.name, "temperature": room.temperature}
                    for room in self.rooms
                ]
            }
        }


# -----------------------------------------------------------------------------
# TemperatureChange — what set_temperature reports back
# -----------------------------------------------------------------------------
@dataclass
class TemperatureChange:
    room: Room                     # The room after the change
    previous_temperature: float


# -----------------------------------------------------------------------------
# ToolResult — Success or Failure, both spoken back as plain text
# -----------------------------------------------------------------------------
# The conversation has no separate error channel.  A Failure is just text
# the model relays to the user like any other tool output.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Success:
    text: str
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Failure:
    message: str
    ok: bool = field(default=False, init=False)

    @property
    def text(self) -> str:
        return self.message


ToolResult = Union[Success, Failure]


def is_number(value: Any) -> bool:
    """True for finite ints/floats.  bool is an int subclass, so exclude it."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def format_degrees(value: float) -> str:
    """Render 21 as '21°C', 21.5 as '21.5°C' and 22.1234567 unrounded."""
    if float(value).is_integer():
        return f"{int(value)}°C"
    return f"{float(value)!r}°C"
