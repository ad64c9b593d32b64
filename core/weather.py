# =============================================================================
# core/weather.py  —  Weather Lookup Adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a free-text location ("Paris", "Reykjavik, Iceland") into one short
#   sentence describing the current conditions, e.g.
#       "The weather in Paris right now is Partly cloudy +18°C."
#
# DATA SOURCE:
#   wttr.in with the one-line format "%C+%t" (condition + temperature).
#   Free, no API key, answers with plain text instead of JSON.
#
# FAILURE MODES:
#   Non-2xx status or a transport error raises UpstreamError.  The dispatcher
#   turns that into "Error getting the weather: ..." for the model to relay.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import urllib.error
import urllib.parse
import urllib.request

from core.config import DEFAULT_WEATHER_BASE_URL
from core.errors import UpstreamError

logger = logging.getLogger(__name__)


class WeatherClient:
    """Stateless wrapper around a wttr.in-style endpoint."""

    def __init__(self, base_url: str = DEFAULT_WEATHER_BASE_URL, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def build_url(self, location: str) -> str:
        quoted = urllib.parse.quote(location.strip(), safe="")
        return f"{self.base_url}/{quoted}?format=%C+%t"

    async def lookup(self, location: str) -> str:
        """Return a sentence describing the weather at `location` right now."""
        logger.debug("Looking up weather for %s", location)
        conditions = await asyncio.to_thread(self._fetch, self.build_url(location))
        return f"The weather in {location} right now is {conditions}."

    def _fetch(self, url: str) -> str:
        req = urllib.request.Request(url, headers={"Accept": "text/plain"})
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return response.read().decode("utf-8", errors="replace").strip()
        except urllib.error.HTTPError as e:
            raise UpstreamError(f"Weather API returned status: {e.code}", status=e.code) from e
        except (urllib.error.URLError, TimeoutError) as e:
            reason = getattr(e, "reason", e)
            raise UpstreamError(f"Weather API request failed: {reason}") from e
