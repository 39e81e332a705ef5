from __future__ import annotations

from typing import Any

import httpx

from brand_investigator.config import settings
from brand_investigator.errors import InvalidCredential, RequestFailed
from brand_investigator.models.investigation import SearchHit

SERVICE = "serper"


async def search(query: str, api_key: str) -> list[SearchHit]:
    """Run one Serper web search and return the ranked organic hits.

    API: POST https://google.serper.dev/search
    Headers:
        - X-API-KEY: <api_key>
    Body: {"q": <query>}

    A 401/403 means the key was rejected; any other non-2xx status fails
    the request. No retry.
    """
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            response = await client.post(
                settings.serper_search_url,
                json={"q": query},
                headers={
                    "X-API-KEY": api_key,
                    "Content-Type": "application/json",
                },
            )
    except httpx.HTTPError as e:
        raise RequestFailed(SERVICE, message=f"{SERVICE} request failed: {e}") from e

    if response.status_code in (401, 403):
        raise InvalidCredential(SERVICE)
    if response.status_code >= 400:
        raise RequestFailed(SERVICE, response.status_code)

    try:
        payload = response.json()
    except ValueError as e:
        raise RequestFailed(SERVICE, response.status_code, f"{SERVICE} returned an unreadable body") from e
    if not isinstance(payload, dict):
        raise RequestFailed(SERVICE, response.status_code, f"{SERVICE} returned an unreadable body")
    return parse_organic(payload)


def parse_organic(payload: dict[str, Any]) -> list[SearchHit]:
    """Map Serper's `organic` array to SearchHit, keeping relevance order."""
    raw_results = payload.get("organic") or []
    if not isinstance(raw_results, list):
        return []
    hits: list[SearchHit] = []
    for idx, item in enumerate(raw_results, start=1):
        if not isinstance(item, dict):
            continue
        hits.append(
            SearchHit(
                title=item.get("title", "") or "",
                link=item.get("link", "") or "",
                snippet=item.get("snippet", "") or "",
                position=_position(item.get("position"), idx),
            )
        )
    return hits


def _position(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def hits_to_dicts(hits: list[SearchHit]) -> list[dict[str, Any]]:
    return [hit.to_dict() for hit in hits]
