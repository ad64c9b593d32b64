# =============================================================================
# core/config.py  —  Settings & Logging Setup
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Collects every environment-driven knob into one frozen Settings object
#   that is passed explicitly into the store and the adapters.  Nothing else
#   in the project reads os.environ.
#
# ENVIRONMENT VARIABLES:
#   ROOMS_FILE            Path to the persisted house document (data/rooms.json)
#   BRAVE_SEARCH_API_KEY  Brave Search subscription token (optional)
#   BRAVE_SEARCH_URL      Brave web search endpoint
#   WEATHER_BASE_URL      wttr.in-compatible weather endpoint
#   SEARCH_RESULT_COUNT   Results requested per search (default 5)
#   SEARCH_LANGUAGE       Brave search_lang parameter (default "en")
#   HTTP_TIMEOUT          Seconds before an upstream call gives up (default 10)
#   AGENT_MODEL           LiteLlm model string for the conversational agent
#   LOG_LEVEL             DEBUG / INFO / WARNING ... (default INFO)
#
#   The .env file is loaded by the entry points (main.py, tools/mcp_server.py)
#   with python-dotenv BEFORE Settings.from_env() is called.
# =============================================================================

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_ROOMS_FILE = PROJECT_ROOT / "data" / "rooms.json"
DEFAULT_BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"
DEFAULT_WEATHER_BASE_URL = "https://wttr.in"
DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def resolve_rooms_file(value: str | os.PathLike | None) -> Path:
    """Relative paths are taken from the project root, not the working directory."""
    path = Path(value or DEFAULT_ROOMS_FILE)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


@dataclass(frozen=True)
class Settings:
    rooms_file: Path = DEFAULT_ROOMS_FILE
    brave_api_key: str | None = None
    brave_search_url: str = DEFAULT_BRAVE_SEARCH_URL
    weather_base_url: str = DEFAULT_WEATHER_BASE_URL
    search_result_count: int = 5
    search_language: str = "en"
    http_timeout: float = 10.0
    model: str = DEFAULT_MODEL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from the process environment (or a given mapping)."""
        env = os.environ if environ is None else environ

        return cls(
            rooms_file=resolve_rooms_file(env.get("ROOMS_FILE")),
            # An empty string in .env means "not configured"
            brave_api_key=env.get("BRAVE_SEARCH_API_KEY") or None,
            brave_search_url=env.get("BRAVE_SEARCH_URL") or DEFAULT_BRAVE_SEARCH_URL,
            weather_base_url=env.get("WEATHER_BASE_URL") or DEFAULT_WEATHER_BASE_URL,
            search_result_count=int(env.get("SEARCH_RESULT_COUNT") or 5),
            search_language=env.get("SEARCH_LANGUAGE") or "en",
            http_timeout=float(env.get("HTTP_TIMEOUT") or 10.0),
            model=env.get("AGENT_MODEL") or DEFAULT_MODEL,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Log to STDERR so stdout stays free for the MCP stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
