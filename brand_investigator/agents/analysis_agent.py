from __future__ import annotations

import json
import time
from typing import Any

import openai

from brand_investigator.config import settings
from brand_investigator.errors import AnalysisUnparseable, InvalidCredential, RequestFailed
from brand_investigator.llm_client import get_client, get_model
from brand_investigator.models.investigation import (
    EnrichmentPayload,
    ProfileRecord,
    SearchHit,
    StageDescriptor,
)
from brand_investigator.services import logger as log_service
from brand_investigator.services.json_extract import error_object, extract_json
from brand_investigator.services.prompt_store import render_prompt
from brand_investigator.tools.web_utils import truncate

SERVICE = "gemini"

PROFILE_ANALYSIS_FALLBACK: dict[str, Any] = {
    "confidence": 0,
    "teamComposition": "Analysis failed",
    "manufacturingCapability": "Unable to assess",
    "redFlags": [],
    "positiveIndicators": [],
    "keyFindings": ["LinkedIn profile analysis could not be completed"],
    "recommendation": "Manual review of team composition recommended",
}


class AnalysisAgent:
    """Language-analysis collaborator.

    Every operation renders one prompt, sends it as a single user message and
    funnels the free-text answer through `extract_json`. An answer without a
    usable JSON object comes back as the error object instead of raising, so
    callers treat missing fields as empty. Remote failures still raise.
    """

    name = "analysis"

    def __init__(self, api_key: str, model: str | None = None):
        self.api_key = api_key
        self.model = model or get_model()
        self.client = None

    async def _complete(self, prompt: str, caller: str) -> str:
        if self.client is None:
            # Built per agent; never shared across credentials.
            self.client = get_client(self.api_key)
        t0 = time.monotonic()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0,
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            log_service.log_llm_call(model=self.model, caller=caller, status="failed", error=str(e))
            raise InvalidCredential(SERVICE) from e
        except openai.APIStatusError as e:
            log_service.log_llm_call(model=self.model, caller=caller, status="failed", error=str(e))
            # Gemini answers a bad key with 400 "API key not valid".
            if e.status_code == 400 and "api key" in str(e).lower():
                raise InvalidCredential(SERVICE) from e
            raise RequestFailed(SERVICE, e.status_code) from e
        except openai.APIConnectionError as e:
            log_service.log_llm_call(model=self.model, caller=caller, status="failed", error=str(e))
            raise RequestFailed(SERVICE, message=f"{SERVICE} request failed: {e}") from e
        elapsed_ms = int((time.monotonic() - t0) * 1000)

        usage = getattr(response, "usage", None)
        log_service.log_llm_call(
            model=self.model,
            caller=caller,
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
            duration_ms=elapsed_ms,
        )

        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        return getattr(choices[0].message, "content", None) or ""

    async def generate(self, prompt: str, *, caller: str = "generate") -> dict[str, Any]:
        """Send one prompt and return the structured object found in the answer."""
        text = await self._complete(prompt, caller)
        try:
            return extract_json(text)
        except AnalysisUnparseable as e:
            log_service.logger.warning(f"{caller}: {e.reason}")
            return error_object(e)

    async def validate_inputs(self, brand_name: str, product_category: str) -> dict[str, Any]:
        prompt = render_prompt(
            "analysis.validate_inputs",
            brand_name=brand_name,
            product_category=product_category,
        )
        return await self.generate(prompt, caller="validate_inputs")

    async def interpret_stage(
        self,
        stage: StageDescriptor,
        hits: list[SearchHit],
        enrichment: EnrichmentPayload | None,
    ) -> dict[str, Any]:
        enhanced_content = ""
        if enrichment and enrichment.success:
            enhanced_content = render_prompt(
                "analysis.enhanced_content",
                title=enrichment.title,
                description=enrichment.description,
                markdown=truncate(enrichment.markdown, settings.max_enrichment_chars) or "N/A",
                metadata=json.dumps(enrichment.metadata),
            )

        top_hits = [hit.to_dict() for hit in hits[: settings.max_analysis_results]]
        prompt = render_prompt(
            "analysis.interpret_stage",
            stage_title=stage.title,
            query=stage.query,
            search_results=json.dumps(top_hits),
            enhanced_content=enhanced_content,
            stage_description=stage.description,
        )
        return await self.generate(prompt, caller=f"interpret_stage:{stage.key}")

    async def analyze_profiles(
        self,
        profiles: list[ProfileRecord],
        brand_name: str,
        product_category: str,
    ) -> dict[str, Any]:
        """Assess team composition. Falls back to a neutral verdict on any failure."""
        profiles_text = "\n\n---\n\n".join(_profile_entry(p) for p in profiles)
        prompt = render_prompt(
            "analysis.analyze_profiles",
            brand_name=brand_name,
            product_category=product_category,
            profiles=profiles_text,
        )
        try:
            return await self.generate(prompt, caller="analyze_profiles")
        except (InvalidCredential, RequestFailed) as e:
            log_service.logger.error(f"LinkedIn profile analysis failed: {e}")
            return dict(PROFILE_ANALYSIS_FALLBACK)

    async def synthesize(
        self,
        findings: dict[str, Any],
        brand_name: str,
        product_category: str,
    ) -> dict[str, Any]:
        prompt = render_prompt(
            "analysis.synthesize",
            brand_name=brand_name,
            product_category=product_category,
            findings=json.dumps(findings),
        )
        return await self.generate(prompt, caller="synthesize")


def _profile_entry(profile: ProfileRecord) -> str:
    return render_prompt(
        "analysis.profile_entry",
        full_name=profile.full_name,
        headline=profile.headline,
        current_company=profile.current_company,
        current_position=profile.current_position,
        location=profile.location,
        summary=profile.summary,
        experience=", ".join(f"{p.title} at {p.company} ({p.duration})" for p in profile.experience),
        education=", ".join(f"{e.degree} from {e.school}" for e in profile.education),
        skills=", ".join(profile.skills),
    )
