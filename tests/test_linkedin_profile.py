"""Tests for LinkedIn profile lookups and normalization."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from brand_investigator.errors import (
    AccessDenied,
    InvalidCredential,
    NotFound,
    ProfileLookupUnavailable,
    RequestFailed,
)
from brand_investigator.models.investigation import UNKNOWN, SearchHit, StageResult
from brand_investigator.tools.linkedin_profile import (
    FEATURE_FLAGS,
    extract_field,
    extract_profile_urls,
    normalize_profile,
    unique_profile_urls,
)


class FakeResponse:
    def __init__(self, status_code: int, payload=None):
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

    async def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        return self.response


def _stage(key: str, links: list[str]) -> StageResult:
    return StageResult(stage=key, hits=[SearchHit(title=link, link=link) for link in links])


class TestExtractField:
    def test_first_present_alias_wins(self):
        assert extract_field({"name": "B", "fullName": "C"}, ("full_name", "name", "fullName")) == "B"

    def test_null_values_are_skipped(self):
        assert extract_field({"full_name": None, "name": "B"}, ("full_name", "name")) == "B"

    def test_default_sentinel(self):
        assert extract_field({}, ("full_name",)) == UNKNOWN
        assert extract_field("not a dict", ("full_name",)) == UNKNOWN


class TestNormalizeProfile:
    def test_unwraps_data_envelope_and_aliases(self):
        raw = {
            "data": {
                "fullName": "Jane Doe",
                "headline": "Founder at Acme",
                "company": {"name": "Acme"},
                "experiences": [
                    {"job_title": "CEO", "company_name": "Acme", "date_range": "2019 - now"},
                    "Sourcing lead",
                ],
                "educations": [{"degree_name": "MBA", "school_name": "IIM"}],
                "skills": ["Sourcing", {"name": "OEM"}, "Sourcing"],
                "linkedin_url": "https://linkedin.com/in/jane",
            }
        }
        record = normalize_profile(raw)

        assert record.full_name == "Jane Doe"
        assert record.headline == "Founder at Acme"
        assert record.current_company == "Acme"
        assert record.current_position == UNKNOWN
        assert record.location == UNKNOWN
        assert record.experience[0].title == "CEO"
        assert record.experience[0].duration == "2019 - now"
        assert record.experience[1].title == "Sourcing lead"
        assert record.experience[1].company == UNKNOWN
        assert record.education[0].school == "IIM"
        assert record.skills == ["Sourcing", "OEM"]
        assert record.profile_url == "https://linkedin.com/in/jane"

    def test_result_envelope(self):
        record = normalize_profile({"result": {"name": "Raj"}})
        assert record.full_name == "Raj"
        assert record.experience == []

    @pytest.mark.parametrize("raw", [None, {}, [], {"error": "quota exceeded"}])
    def test_unusable_payloads(self, raw):
        with pytest.raises(ProfileLookupUnavailable):
            normalize_profile(raw)


class TestProfileUrls:
    def test_extract_only_profile_links(self):
        hits = [
            SearchHit(title="a", link="https://www.linkedin.com/in/jane"),
            SearchHit(title="b", link="https://www.linkedin.com/company/acme"),
            SearchHit(title="c", link=""),
        ]
        assert extract_profile_urls(hits) == ["https://www.linkedin.com/in/jane"]

    def test_dedupe_across_stages_keeps_first_seen_order(self):
        url = "https://linkedin.com/in/jane"
        stages = [
            _stage("companyName", [url]),
            _stage("founders", [url, "https://linkedin.com/in/raj"]),
            _stage("imports", [url]),
        ]
        assert unique_profile_urls(stages, 3) == [url, "https://linkedin.com/in/raj"]

    def test_cap(self):
        urls = [f"https://linkedin.com/in/p{i}" for i in range(5)]
        assert unique_profile_urls([_stage("founders", urls)], 3) == urls[:3]
        assert unique_profile_urls([_stage("founders", urls)], 0) == []


@pytest.mark.asyncio
async def test_fetch_profile_sends_flags_and_falls_back_to_requested_url():
    from brand_investigator.tools import linkedin_profile

    fake = FakeClient(FakeResponse(200, {"data": {"full_name": "Jane"}}))
    with patch("brand_investigator.tools.linkedin_profile.httpx.AsyncClient", return_value=fake):
        record = await linkedin_profile.fetch_profile("https://linkedin.com/in/jane", "rapid-key")

    assert record.full_name == "Jane"
    assert record.profile_url == "https://linkedin.com/in/jane"
    call = fake.calls[0]
    assert call["url"].endswith("/get-linkedin-profile")
    assert call["params"]["linkedin_url"] == "https://linkedin.com/in/jane"
    assert all(call["params"][flag] == "false" for flag in FEATURE_FLAGS)
    assert call["headers"]["x-rapidapi-key"] == "rapid-key"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, exc_type",
    [(401, InvalidCredential), (403, AccessDenied), (404, NotFound), (429, RequestFailed)],
)
async def test_fetch_profile_status_mapping(status, exc_type):
    from brand_investigator.tools import linkedin_profile

    fake = FakeClient(FakeResponse(status, {}))
    with patch("brand_investigator.tools.linkedin_profile.httpx.AsyncClient", return_value=fake):
        with pytest.raises(exc_type):
            await linkedin_profile.fetch_profile("https://linkedin.com/in/jane", "k")
