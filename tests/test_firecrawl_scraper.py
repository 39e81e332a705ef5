"""Tests for Firecrawl enrichment."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from brand_investigator.errors import EnrichmentUnavailable, RequestFailed
from brand_investigator.tools.firecrawl_scraper import is_scrapeable_url


class FakeResponse:
    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class FakeClient:
    def __init__(self, response: FakeResponse):
        self.response = response
        self.calls: list[dict] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    async def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        return self.response


class TestIsScrapeableUrl:
    def test_regular_pages(self):
        assert is_scrapeable_url("https://www.zaubacorp.com/company/ACME") is True
        assert is_scrapeable_url("http://example.com/about") is True

    def test_social_hosts(self):
        assert is_scrapeable_url("https://www.youtube.com/watch?v=1") is False
        assert is_scrapeable_url("https://m.facebook.com/acme") is False
        assert is_scrapeable_url("https://twitter.com/acme") is False
        assert is_scrapeable_url("https://www.instagram.com/acme") is False
        assert is_scrapeable_url("https://x.com/acme") is False

    def test_hosts_merely_containing_x(self):
        assert is_scrapeable_url("https://xerox.com/products") is True

    def test_invalid_urls(self):
        assert is_scrapeable_url("") is False
        assert is_scrapeable_url("ftp://example.com") is False
        assert is_scrapeable_url("not-a-url") is False


@pytest.mark.asyncio
async def test_scrape_maps_payload():
    from brand_investigator.tools import firecrawl_scraper

    payload = {
        "success": True,
        "data": {
            "markdown": "# Acme\nWe manufacture in Pune.",
            "html": "<h1>Acme</h1>",
            "metadata": {"title": "Acme Home", "description": "Toothbrushes"},
        },
    }
    fake = FakeClient(FakeResponse(200, payload))
    with patch("brand_investigator.tools.firecrawl_scraper.httpx.AsyncClient", return_value=fake):
        result = await firecrawl_scraper.scrape("https://acme.example/about", "fc-key")

    assert result.success is True
    assert result.title == "Acme Home"
    assert result.description == "Toothbrushes"
    assert result.markdown.startswith("# Acme")
    assert fake.calls[0]["json"] == {"url": "https://acme.example/about", "formats": ["markdown", "html"]}
    assert fake.calls[0]["headers"]["Authorization"] == "Bearer fc-key"


@pytest.mark.asyncio
async def test_scrape_unsuccessful_body_is_unavailable():
    from brand_investigator.tools import firecrawl_scraper

    fake = FakeClient(FakeResponse(200, {"success": False, "error": "blocked"}))
    with patch("brand_investigator.tools.firecrawl_scraper.httpx.AsyncClient", return_value=fake):
        with pytest.raises(EnrichmentUnavailable):
            await firecrawl_scraper.scrape("https://acme.example", "k")


@pytest.mark.asyncio
async def test_scrape_http_error_is_request_failed():
    from brand_investigator.tools import firecrawl_scraper

    fake = FakeClient(FakeResponse(402, {}))
    with patch("brand_investigator.tools.firecrawl_scraper.httpx.AsyncClient", return_value=fake):
        with pytest.raises(RequestFailed):
            await firecrawl_scraper.scrape("https://acme.example", "k")


@pytest.mark.asyncio
async def test_safe_scrape_swallows_failures():
    from brand_investigator.tools import firecrawl_scraper

    fake = FakeClient(FakeResponse(500, {}))
    with patch("brand_investigator.tools.firecrawl_scraper.httpx.AsyncClient", return_value=fake):
        assert await firecrawl_scraper.safe_scrape("https://acme.example", "k") is None
