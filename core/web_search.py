# =============================================================================
# core/web_search.py  —  Web Search Adapter (Brave Search)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends a query to the Brave web search API and formats the top results as
#   a short numbered list the model can read aloud or summarise:
#
#       Here are the search results for "tide times":
#
#       1. Tide Times and Charts
#          URL: https://example.com/tides
#          Description: Daily tide predictions ...
#
# CREDENTIAL:
#   Brave requires a subscription token in the X-Subscription-Token header.
#   Without one, search() raises MissingCredential BEFORE touching the
#   network.  A missing key is a recoverable condition, not a startup error.
#
# OUTPUT GUARANTEE:
#   search() never returns an empty string.  Zero hits produce an explicit
#   "No results found for this query." line.
# =============================================================================

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from core.config import DEFAULT_BRAVE_SEARCH_URL
from core.errors import MissingCredential, UpstreamError

logger = logging.getLogger(__name__)

NO_RESULTS = "No results found for this query."


class BraveSearchClient:
    """Stateless wrapper around the Brave web search endpoint."""

    def __init__(
        self,
        api_key: str | None,
        endpoint: str = DEFAULT_BRAVE_SEARCH_URL,
        count: int = 5,
        language: str = "en",
        timeout: float = 10.0,
    ):
        self._api_key = api_key
        self.endpoint = endpoint
        self.count = count
        self.language = language
        self.timeout = timeout

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key)

    def build_url(self, query: str) -> str:
        params = urllib.parse.urlencode(
            {"q": query, "count": self.count, "search_lang": self.language}
        )
        return f"{self.endpoint}?{params}"

    async def search(self, query: str) -> str:
        if not self.has_credential:
            logger.error("BRAVE_SEARCH_API_KEY is not set; skipping web search")
            raise MissingCredential(
                "Brave Search API key is not configured. "
                "Please set the BRAVE_SEARCH_API_KEY environment variable."
            )

        logger.debug("Searching the web for %r", query)
        data = await asyncio.to_thread(self._fetch, self.build_url(query))
        return format_results(query, _extract_results(data), limit=self.count)

    def _fetch(self, url: str) -> Any:
        req = urllib.request.Request(
            url,
            headers={
                "Accept": "application/json",
                "X-Subscription-Token": self._api_key or "",
            },
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                body = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace") if e.fp else ""
            logger.error("Brave Search API error response: %s", detail)
            raise UpstreamError(
                f"Brave Search API returned status: {e.code}, message: {detail}",
                status=e.code,
            ) from e
        except (urllib.error.URLError, TimeoutError) as e:
            reason = getattr(e, "reason", e)
            raise UpstreamError(f"Brave Search API request failed: {reason}") from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise UpstreamError("Brave Search API returned a non-JSON response") from e


def _extract_results(data: Any) -> list[dict]:
    # Brave nests ranked hits under web.results; either level may be absent.
    if not isinstance(data, dict):
        return []
    web = data.get("web")
    if not isinstance(web, dict):
        return []
    results = web.get("results")
    if not isinstance(results, list):
        return []
    return [r for r in results if isinstance(r, dict)]


def format_results(query: str, results: list[dict], limit: int = 5) -> str:
    """Render ranked results as numbered title/URL/description blocks."""
    header = f'Here are the search results for "{query}":'
    if not results:
        return f"{header}\n\n{NO_RESULTS}"

    blocks = []
    for index, result in enumerate(results[:limit], start=1):
        blocks.append(
            f"{index}. {result.get('title', '')}\n"
            f"   URL: {result.get('url', '')}\n"
            f"   Description: {result.get('description', '')}"
        )
    return header + "\n\n" + "\n\n".join(blocks)
