from __future__ import annotations

import httpx

from brand_investigator.config import settings
from brand_investigator.errors import EnrichmentUnavailable, RequestFailed
from brand_investigator.models.investigation import EnrichmentPayload
from brand_investigator.services.logger import logger
from brand_investigator.tools.web_utils import hostname, is_valid_url

SERVICE = "firecrawl"

# Hosts that block scraping or only serve login walls.
UNSCRAPEABLE_DOMAINS = ("youtube.com", "facebook.com", "twitter.com", "instagram.com")
UNSCRAPEABLE_HOSTS = ("x.com",)


def is_scrapeable_url(url: str) -> bool:
    """True when the URL is http(s) and not on a social-media host."""
    if not is_valid_url(url):
        return False
    host = hostname(url)
    if host in UNSCRAPEABLE_HOSTS:
        return False
    return not any(domain in host for domain in UNSCRAPEABLE_DOMAINS)


async def scrape(url: str, api_key: str) -> EnrichmentPayload:
    """Deep-fetch a page with Firecrawl v1 and return markdown, html and metadata.

    API: POST https://api.firecrawl.dev/v1/scrape
    Headers:
        - Authorization: Bearer <api_key>
    Body: {"url": <url>, "formats": ["markdown", "html"]}
    """
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            response = await client.post(
                settings.firecrawl_scrape_url,
                json={"url": url, "formats": ["markdown", "html"]},
                headers={
                    "Authorization": f"Bearer {api_key}",
                    "Content-Type": "application/json",
                },
            )
    except httpx.HTTPError as e:
        raise RequestFailed(SERVICE, message=f"{SERVICE} request failed: {e}") from e

    if response.status_code >= 400:
        raise RequestFailed(SERVICE, response.status_code)

    result = response.json()
    if not isinstance(result, dict):
        raise EnrichmentUnavailable(f"{SERVICE} returned an unexpected body")
    data = result.get("data")
    if not result.get("success") or not isinstance(data, dict):
        raise EnrichmentUnavailable(
            f"{SERVICE} returned no content: {result.get('error') or 'Unknown error'}"
        )

    metadata = data.get("metadata") or {}
    return EnrichmentPayload(
        url=url,
        success=True,
        markdown=data.get("markdown") or "",
        html=data.get("html") or "",
        metadata=metadata,
        title=metadata.get("title") or "",
        description=metadata.get("description") or "",
    )


async def safe_scrape(url: str, api_key: str) -> EnrichmentPayload | None:
    """Scrape without ever raising; any failure means "no enrichment"."""
    try:
        return await scrape(url, api_key)
    except Exception as e:
        logger.info(f"Firecrawl failed for {url}: {e}")
        return None
