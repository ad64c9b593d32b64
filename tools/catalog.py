# =============================================================================
# tools/catalog.py  —  The Four Home Assistant Tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Binds each tool schema (core/schema.py) to a handler that calls into
#   core/ and formats the outcome as a Success or Failure.
#
#   | Tool                | Delegates to                        | Side effect  |
#   |---------------------|-------------------------------------|--------------|
#   | weather             | WeatherClient.lookup                | network read |
#   | searchWeb           | BraveSearchClient.search            | network read |
#   | getRoomTemperatures | RoomTemperatureStore.read_all       | none         |
#   | setRoomTemperature  | RoomTemperatureStore.set_temperature| durable write|
#
# Handlers let StoreUnavailable / UpstreamError / MissingCredential
# propagate; the Dispatcher prefixes them with "Error <doing X>:".
# An unknown room is an ordinary answer, so it comes back as a Failure
# listing the rooms that do exist.
# =============================================================================

from __future__ import annotations

import logging

from core.config import Settings
from core.errors import RoomNotFound
from core.models import Failure, Success, ToolResult, format_degrees
from core.room_store import RoomTemperatureStore
from core.schema import (
    GET_ROOM_TEMPERATURES,
    SEARCH_WEB,
    SET_ROOM_TEMPERATURE,
    WEATHER,
    GetRoomTemperaturesArgs,
    SearchWebArgs,
    SetRoomTemperatureArgs,
    WeatherArgs,
)
from core.weather import WeatherClient
from core.web_search import BraveSearchClient
from tools.registry import Dispatcher, ToolDescriptor, ToolRegistry

logger = logging.getLogger(__name__)


class HomeTools:
    """Handlers for every tool, sharing one store and two adapters."""

    def __init__(
        self,
        store: RoomTemperatureStore,
        weather: WeatherClient,
        search: BraveSearchClient,
    ):
        self.store = store
        self.weather_client = weather
        self.search_client = search

    async def weather(self, args: WeatherArgs) -> ToolResult:
        return Success(await self.weather_client.lookup(args.location))

    async def search_web(self, args: SearchWebArgs) -> ToolResult:
        return Success(await self.search_client.search(args.query))

    async def get_room_temperatures(self, args: GetRoomTemperaturesArgs) -> ToolResult:
        house = await self.store.read_all()
        if not house.rooms:
            return Success("There are no rooms configured in the house.")

        lines = [f"{room.name}: {format_degrees(room.temperature)}" for room in house.rooms]
        return Success("Current room temperatures:\n\n" + "\n".join(lines))

    async def set_room_temperature(self, args: SetRoomTemperatureArgs) -> ToolResult:
        try:
            change = await self.store.set_temperature(args.room_name, args.temperature)
        except RoomNotFound as e:
            return Failure(str(e))

        return Success(
            f"Temperature in {change.room.name} has been changed from "
            f"{format_degrees(change.previous_temperature)} to "
            f"{format_degrees(change.room.temperature)}."
        )

    def descriptors(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor(WEATHER, self.weather, action="getting the weather"),
            ToolDescriptor(SEARCH_WEB, self.search_web, action="searching the web"),
            ToolDescriptor(GET_ROOM_TEMPERATURES, self.get_room_temperatures,
                           action="getting room temperatures"),
            ToolDescriptor(SET_ROOM_TEMPERATURE, self.set_room_temperature,
                           action="setting room temperature"),
        ]


def build_registry(
    store: RoomTemperatureStore,
    weather: WeatherClient,
    search: BraveSearchClient,
) -> ToolRegistry:
    """Assemble the session's tool registry from shared dependencies."""
    return ToolRegistry(HomeTools(store, weather, search).descriptors())


def build_dispatcher(settings: Settings, store: RoomTemperatureStore | None = None) -> Dispatcher:
    """Wire store, adapters and registry from settings.

    Pass an existing `store` when several sessions in one process must share
    the same document (and therefore the same write lock).
    """
    store = store or RoomTemperatureStore(settings.rooms_file)
    weather = WeatherClient(settings.weather_base_url, timeout=settings.http_timeout)
    search = BraveSearchClient(
        settings.brave_api_key,
        endpoint=settings.brave_search_url,
        count=settings.search_result_count,
        language=settings.search_language,
        timeout=settings.http_timeout,
    )
    if not search.has_credential:
        logger.warning("BRAVE_SEARCH_API_KEY is not set; searchWeb will report a configuration error")
    return Dispatcher(build_registry(store, weather, search))
