"""
Pytest configuration and shared fixtures.

Sets up the Python path so tests import the project packages from the repo
root, and provides a temporary rooms document for store-backed tests.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Go up: tests -> project root
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.room_store import RoomTemperatureStore  # noqa: E402
from core.weather import WeatherClient  # noqa: E402
from core.web_search import BraveSearchClient  # noqa: E402
from tools.catalog import build_registry  # noqa: E402
from tools.registry import Dispatcher  # noqa: E402


HOUSE = {
    "house": {
        "rooms": [
            {"name": "Kitchen", "temperature": 21},
            {"name": "Bedroom", "temperature": 18},
        ]
    }
}


def write_rooms(path: Path, document) -> Path:
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path


def fake_response(body: bytes) -> MagicMock:
    """Stand-in for the context manager urllib.request.urlopen returns."""
    response = MagicMock()
    response.read.return_value = body
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


@pytest.fixture
def rooms_file(tmp_path):
    return write_rooms(tmp_path / "rooms.json", HOUSE)


@pytest.fixture
def store(rooms_file):
    return RoomTemperatureStore(rooms_file)


@pytest.fixture
def dispatcher(store):
    weather = WeatherClient("https://wttr.example")
    search = BraveSearchClient("test-key", endpoint="https://search.example/web")
    return Dispatcher(build_registry(store, weather, search))
