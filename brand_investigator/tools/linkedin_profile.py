from __future__ import annotations

from typing import Any, Iterable

import httpx

from brand_investigator.config import settings
from brand_investigator.errors import (
    AccessDenied,
    InvalidCredential,
    NotFound,
    ProfileLookupUnavailable,
    RequestFailed,
)
from brand_investigator.models.investigation import (
    UNKNOWN,
    ProfileEducation,
    ProfilePosition,
    ProfileRecord,
    SearchHit,
    StageResult,
)

SERVICE = "linkedin"
PROFILE_URL_MARKER = "linkedin.com/in/"

# Every optional section of the upstream record is switched off.
FEATURE_FLAGS = (
    "include_skills",
    "include_certifications",
    "include_publications",
    "include_honors",
    "include_volunteers",
    "include_projects",
    "include_patents",
    "include_courses",
    "include_organizations",
    "include_profile_status",
    "include_company_public_url",
)

# Candidate upstream field names per canonical field, first match wins.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "full_name": ("full_name", "name", "fullName", "displayName", "full_name_clean"),
    "headline": ("headline", "title", "job_title", "current_title", "headline_clean"),
    "location": ("location", "geoLocation", "location_name", "location_clean"),
    "summary": ("summary", "about", "description", "bio", "summary_clean"),
    "current_company": ("current_company", "company", "employer", "current_company_name"),
    "current_position": ("current_position", "job_title", "title", "current_job_title"),
    "experience": ("experience", "work_experience", "employment_history", "jobs", "experiences"),
    "education": ("education", "educational_background", "academic_history", "educations"),
    "skills": ("skills", "skill_list", "expertise"),
    "profile_url": ("profile_url", "url", "linkedin_url", "public_profile_url"),
}

POSITION_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("title", "job_title", "position"),
    "company": ("company", "company_name", "employer"),
    "duration": ("duration", "date_range", "dates"),
}

EDUCATION_ALIASES: dict[str, tuple[str, ...]] = {
    "degree": ("degree", "degree_name", "field_of_study"),
    "school": ("school", "school_name", "institution"),
}


def extract_field(obj: Any, field_names: Iterable[str], default: Any = UNKNOWN) -> Any:
    """Return the first present, non-null value among `field_names`."""
    if not isinstance(obj, dict):
        return default
    for name in field_names:
        value = obj.get(name)
        if value is not None:
            return value
    return default


def _text(value: Any) -> str:
    if value is None:
        return UNKNOWN
    if isinstance(value, str):
        return value.strip() or UNKNOWN
    if isinstance(value, dict):
        # Some payloads nest names, e.g. {"name": "Acme"}.
        return _text(extract_field(value, ("name", "title", "text"), None))
    return str(value)


def _items(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _position(entry: Any) -> ProfilePosition:
    if isinstance(entry, str):
        return ProfilePosition(title=entry.strip() or UNKNOWN)
    return ProfilePosition(
        **{name: _text(extract_field(entry, aliases)) for name, aliases in POSITION_ALIASES.items()}
    )


def _education(entry: Any) -> ProfileEducation:
    if isinstance(entry, str):
        return ProfileEducation(school=entry.strip() or UNKNOWN)
    return ProfileEducation(
        **{name: _text(extract_field(entry, aliases)) for name, aliases in EDUCATION_ALIASES.items()}
    )


def _skills(value: Any) -> list[str]:
    skills: list[str] = []
    for item in _items(value):
        name = _text(item)
        if name != UNKNOWN and name not in skills:
            skills.append(name)
    return skills


def normalize_profile(raw: Any) -> ProfileRecord:
    """Map a heterogeneous upstream payload onto the canonical ProfileRecord."""
    if not raw or not isinstance(raw, dict) or raw.get("error"):
        message = raw.get("error") if isinstance(raw, dict) and raw.get("error") else None
        raise ProfileLookupUnavailable(str(message or "Invalid LinkedIn profile data"))

    profile_data: dict[str, Any] = raw
    if isinstance(raw.get("data"), dict):
        profile_data = raw["data"]
    if isinstance(raw.get("result"), dict):
        profile_data = raw["result"]

    def scalar(name: str) -> str:
        return _text(extract_field(profile_data, FIELD_ALIASES[name]))

    return ProfileRecord(
        full_name=scalar("full_name"),
        headline=scalar("headline"),
        location=scalar("location"),
        summary=scalar("summary"),
        current_company=scalar("current_company"),
        current_position=scalar("current_position"),
        experience=[_position(e) for e in _items(extract_field(profile_data, FIELD_ALIASES["experience"], []))],
        education=[_education(e) for e in _items(extract_field(profile_data, FIELD_ALIASES["education"], []))],
        skills=_skills(extract_field(profile_data, FIELD_ALIASES["skills"], [])),
        profile_url=scalar("profile_url"),
    )


async def fetch_profile(profile_url: str, api_key: str) -> ProfileRecord:
    """Fetch one LinkedIn profile through RapidAPI.

    API: GET https://fresh-linkedin-profile-data.p.rapidapi.com/get-linkedin-profile
    Headers:
        - x-rapidapi-host: <host>
        - x-rapidapi-key: <api_key>
    """
    params: dict[str, str] = {"linkedin_url": profile_url}
    params.update({flag: "false" for flag in FEATURE_FLAGS})
    host = settings.linkedin_profile_host

    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            response = await client.get(
                f"https://{host}/get-linkedin-profile",
                params=params,
                headers={
                    "x-rapidapi-host": host,
                    "x-rapidapi-key": api_key,
                },
            )
    except httpx.HTTPError as e:
        raise RequestFailed(SERVICE, message=f"{SERVICE} request failed: {e}") from e

    status = response.status_code
    if status == 401:
        raise InvalidCredential("rapidapi", "Invalid RapidAPI Key")
    if status == 403:
        raise AccessDenied(SERVICE, status, "LinkedIn profile access denied")
    if status == 404:
        raise NotFound(SERVICE, status, "LinkedIn profile not found")
    if status >= 400:
        raise RequestFailed(SERVICE, status)

    record = normalize_profile(response.json())
    if record.profile_url == UNKNOWN:
        record.profile_url = profile_url
    return record


def extract_profile_urls(hits: list[SearchHit]) -> list[str]:
    """Links that point at an individual LinkedIn profile, in hit order."""
    return [hit.link for hit in hits if hit.link and PROFILE_URL_MARKER in hit.link]


def unique_profile_urls(stage_results: Iterable[StageResult], limit: int) -> list[str]:
    """Profile URLs across all stages, deduplicated in first-seen order and capped."""
    seen: set[str] = set()
    urls: list[str] = []
    for result in stage_results:
        for url in extract_profile_urls(result.hits):
            if url in seen:
                continue
            seen.add(url)
            urls.append(url)
    return urls[: max(limit, 0)]
