"""
Unit tests for the weather and web search adapters.

urllib.request.urlopen is patched throughout; no test touches the network.
"""

import io
import json
import urllib.error
from unittest.mock import patch

import pytest

from core.errors import MissingCredential, UpstreamError
from core.weather import WeatherClient
from core.web_search import NO_RESULTS, BraveSearchClient, format_results
from tests.conftest import fake_response


def _http_error(url, code, body=b""):
    return urllib.error.HTTPError(url, code, "error", {}, io.BytesIO(body))


class TestWeatherClient:
    """Tests for WeatherClient.lookup."""

    def test_builds_one_line_format_url(self):
        """Location is URL-encoded and the %C+%t format requested."""
        client = WeatherClient("https://wttr.in/")

        assert client.build_url("New York") == "https://wttr.in/New%20York?format=%C+%t"

    @pytest.mark.asyncio
    async def test_formats_sentence(self):
        """The upstream text is wrapped into a sentence."""
        with patch("urllib.request.urlopen", return_value=fake_response("Sunny +20°C\n".encode())) as mock_urlopen:
            text = await WeatherClient().lookup("Paris")

        assert text == "The weather in Paris right now is Sunny +20°C."
        mock_urlopen.assert_called_once()

    @pytest.mark.asyncio
    async def test_http_error_is_upstream_error(self):
        """A non-2xx status raises UpstreamError carrying the status."""
        with patch("urllib.request.urlopen", side_effect=_http_error("u", 503)):
            with pytest.raises(UpstreamError) as exc_info:
                await WeatherClient().lookup("Paris")

        assert exc_info.value.status == 503
        assert "503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_error_is_upstream_error(self):
        """Transport failures are UpstreamError too."""
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("no route")):
            with pytest.raises(UpstreamError):
                await WeatherClient().lookup("Paris")


class TestBraveSearchClient:
    """Tests for BraveSearchClient.search."""

    @pytest.mark.asyncio
    async def test_missing_key_fails_fast(self):
        """Without a key, no request is made."""
        with patch("urllib.request.urlopen") as mock_urlopen:
            with pytest.raises(MissingCredential):
                await BraveSearchClient(None).search("news")

        mock_urlopen.assert_not_called()

    @pytest.mark.asyncio
    async def test_request_shape(self):
        """Query, count, language and the subscription header are sent."""
        body = json.dumps({"web": {"results": []}}).encode()
        with patch("urllib.request.urlopen", return_value=fake_response(body)) as mock_urlopen:
            await BraveSearchClient("secret", endpoint="https://search.example/web").search("tide times")

        request = mock_urlopen.call_args.args[0]
        assert request.full_url == "https://search.example/web?q=tide+times&count=5&search_lang=en"
        assert request.get_header("X-subscription-token") == "secret"
        assert request.get_header("Accept") == "application/json"

    @pytest.mark.asyncio
    async def test_formats_ranked_results(self):
        """Results are numbered with URL and description lines."""
        body = json.dumps({"web": {"results": [
            {"title": "First", "url": "https://a.example", "description": "Alpha"},
            {"title": "Second", "url": "https://b.example", "description": "Beta"},
        ]}}).encode()
        with patch("urllib.request.urlopen", return_value=fake_response(body)):
            text = await BraveSearchClient("k").search("q")

        assert text.startswith('Here are the search results for "q":')
        assert "1. First\n   URL: https://a.example\n   Description: Alpha" in text
        assert "2. Second" in text

    @pytest.mark.asyncio
    async def test_zero_results_says_so(self):
        """An empty result list is reported explicitly."""
        with patch("urllib.request.urlopen", return_value=fake_response(b"{}")):
            text = await BraveSearchClient("k").search("zzzz")

        assert text
        assert NO_RESULTS in text

    @pytest.mark.asyncio
    async def test_http_error_includes_body(self):
        """Upstream failures carry status and message."""
        error = _http_error("u", 401, b"invalid token")
        with patch("urllib.request.urlopen", side_effect=error):
            with pytest.raises(UpstreamError) as exc_info:
                await BraveSearchClient("k").search("q")

        assert exc_info.value.status == 401
        assert "invalid token" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        """A garbled body is an UpstreamError, not a JSONDecodeError."""
        with patch("urllib.request.urlopen", return_value=fake_response(b"<html>")):
            with pytest.raises(UpstreamError):
                await BraveSearchClient("k").search("q")


class TestFormatResults:
    """Tests for format_results."""

    def test_caps_at_limit(self):
        """No more than `limit` results are listed."""
        results = [{"title": f"T{i}", "url": "u", "description": "d"} for i in range(8)]

        text = format_results("q", results, limit=5)

        assert "5. T4" in text
        assert "6. T5" not in text
