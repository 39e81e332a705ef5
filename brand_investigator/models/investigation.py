from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator, Literal

UNKNOWN = "N/A"
PROFILE_FINDINGS_KEY = "linkedinProfiles"

Priority = Literal["high", "medium"]


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _is_set(value: str | None) -> bool:
    return bool(value and value.strip())


@dataclass(slots=True)
class Credentials:
    """Opaque per-service API keys. Search and analysis keys are required."""

    serper: str = ""
    gemini: str = ""
    firecrawl: str = ""
    rapidapi: str = ""

    def has_required(self) -> bool:
        return _is_set(self.serper) and _is_set(self.gemini)

    def optional_status(self) -> dict[str, bool]:
        return {"firecrawl": _is_set(self.firecrawl), "rapidapi": _is_set(self.rapidapi)}

    def merged_with(self, other: "Credentials") -> "Credentials":
        """Return a copy where non-blank values from `other` win."""
        return Credentials(
            serper=other.serper.strip() if _is_set(other.serper) else self.serper,
            gemini=other.gemini.strip() if _is_set(other.gemini) else self.gemini,
            firecrawl=other.firecrawl.strip() if _is_set(other.firecrawl) else self.firecrawl,
            rapidapi=other.rapidapi.strip() if _is_set(other.rapidapi) else self.rapidapi,
        )


@dataclass(frozen=True, slots=True)
class StageDescriptor:
    key: str
    title: str
    query: str
    description: str
    priority: Priority

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class SearchHit:
    title: str
    link: str
    snippet: str = ""
    position: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "link": self.link, "snippet": self.snippet}


@dataclass(slots=True)
class EnrichmentPayload:
    url: str
    success: bool = True
    markdown: str = ""
    html: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    title: str = ""
    description: str = ""

    def to_dict(self, *, include_html: bool = False) -> dict[str, Any]:
        data = {
            "url": self.url,
            "success": self.success,
            "markdown": self.markdown,
            "metadata": self.metadata,
            "title": self.title,
            "description": self.description,
        }
        if include_html:
            data["html"] = self.html
        return data


@dataclass(slots=True)
class StageResult:
    stage: str
    hits: list[SearchHit] = field(default_factory=list)
    enrichment: EnrichmentPayload | None = None
    analysis: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage,
            "search_results": [hit.to_dict() for hit in self.hits],
            "enhanced_content": self.enrichment.to_dict() if self.enrichment else None,
            "ai_analysis": self.analysis,
        }


@dataclass(slots=True)
class ProfilePosition:
    title: str = UNKNOWN
    company: str = UNKNOWN
    duration: str = UNKNOWN


@dataclass(slots=True)
class ProfileEducation:
    degree: str = UNKNOWN
    school: str = UNKNOWN


@dataclass(slots=True)
class ProfileRecord:
    """Canonical LinkedIn profile; every scalar falls back to UNKNOWN."""

    full_name: str = UNKNOWN
    headline: str = UNKNOWN
    location: str = UNKNOWN
    summary: str = UNKNOWN
    current_company: str = UNKNOWN
    current_position: str = UNKNOWN
    experience: list[ProfilePosition] = field(default_factory=list)
    education: list[ProfileEducation] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    profile_url: str = UNKNOWN
    fetched_at: str = field(default_factory=_utcnow)
    source: str = "RapidAPI LinkedIn Profile Data"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ProfileFindings:
    profiles: list[ProfileRecord] = field(default_factory=list)
    analysis: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "profiles": [p.to_dict() for p in self.profiles],
            "ai_analysis": self.analysis,
        }


Finding = StageResult | ProfileFindings


@dataclass(slots=True)
class InvestigationAggregate:
    brand_name: str
    product_category: str
    validation: dict[str, Any] = field(default_factory=dict)
    findings: dict[str, Finding] = field(default_factory=dict)
    final_report: dict[str, Any] | None = None
    # Optional collaborators that had a credential for this run.
    optional_collaborators: dict[str, bool] = field(default_factory=dict)
    started_at: str = field(default_factory=_utcnow)
    completed_at: str | None = None

    @property
    def profile_findings(self) -> ProfileFindings | None:
        entry = self.findings.get(PROFILE_FINDINGS_KEY)
        return entry if isinstance(entry, ProfileFindings) else None

    def stage_results(self) -> Iterator[StageResult]:
        for entry in self.findings.values():
            if isinstance(entry, StageResult):
                yield entry

    def findings_to_dict(self) -> dict[str, Any]:
        return {key: entry.to_dict() for key, entry in self.findings.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "brand_name": self.brand_name,
            "product_category": self.product_category,
            "validation": self.validation,
            "findings": self.findings_to_dict(),
            "final_report": self.final_report,
            "optional_collaborators": self.optional_collaborators,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
        }
