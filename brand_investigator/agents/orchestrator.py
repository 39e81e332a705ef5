from __future__ import annotations

import inspect
import time
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Callable

from brand_investigator.agents.analysis_agent import AnalysisAgent
from brand_investigator.agents.stages import build_stages
from brand_investigator.config import settings
from brand_investigator.errors import (
    InvestigationError,
    MissingRequiredInputs,
    ValidationFailed,
)
from brand_investigator.llm_client import get_model
from brand_investigator.models.events import EventType, SSEEvent
from brand_investigator.models.investigation import (
    PROFILE_FINDINGS_KEY,
    Credentials,
    InvestigationAggregate,
    ProfileFindings,
    ProfileRecord,
    StageResult,
)
from brand_investigator.services import logger as log_service
from brand_investigator.services import streaming
from brand_investigator.tools import firecrawl_scraper, linkedin_profile, serper_search
from brand_investigator.tools.web_utils import clean_content

MISSING_REQUIRED_KEYS = "Please provide Serper API Key, Gemini API Key, and Brand Name."
VALIDATING = "Validating inputs with AI..."
ANALYZING_LINKEDIN = "Analyzing LinkedIn profiles..."
GENERATING_REPORT = "Generating final AI analysis..."

PROFILE_STEP = 6
SYNTHESIS_STEP = 7

ProgressCallback = Callable[[int, str], Any]
CompleteCallback = Callable[[InvestigationAggregate], Any]
ErrorCallback = Callable[[str, str], Any]


async def _notify(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class InvestigationOrchestrator:
    """Runs one brand investigation end to end.

    Flow:
      1. Validate the brand/category with the language model
      2. For each of the four stages, strictly in order:
         search -> optional Firecrawl enrichment -> stage interpretation
      3. If a RapidAPI key is present, look up LinkedIn profiles found in
         the search hits (deduplicated, capped) and analyse the team
      4. Synthesize a final report over every finding

    Each run threads its own InvestigationAggregate; nothing is shared
    between runs. Search and analysis failures abort the run. Enrichment
    and profile lookups only ever degrade it.
    """

    def __init__(self, model: str | None = None):
        self.model = model or get_model()
        self.max_linkedin_profiles = max(int(settings.max_linkedin_profiles), 0)
        self.default_product_category = settings.default_product_category

    def _analysis_agent(self, api_key: str) -> AnalysisAgent:
        return AnalysisAgent(api_key, model=self.model)

    def _new_aggregate(
        self,
        brand_name: str,
        product_category: str,
        credentials: Credentials,
    ) -> InvestigationAggregate:
        brand = (brand_name or "").strip()
        category = (product_category or "").strip() or self.default_product_category
        if not brand or not credentials.has_required():
            raise MissingRequiredInputs(MISSING_REQUIRED_KEYS)
        return InvestigationAggregate(brand_name=brand, product_category=category)

    async def _pipeline(
        self,
        aggregate: InvestigationAggregate,
        credentials: Credentials,
    ) -> AsyncGenerator[SSEEvent, None]:
        brand = aggregate.brand_name
        category = aggregate.product_category
        analyst = self._analysis_agent(credentials.gemini)
        optional = credentials.optional_status()
        aggregate.optional_collaborators = dict(optional)
        current_stage: str | None = None

        log_service.log_event(
            event_type="investigation_started",
            message="Investigation started",
            brand_name=brand,
            product_category=category,
            optional_collaborators=optional,
        )

        try:
            yield streaming.progress(1, VALIDATING)
            validation = await analyst.validate_inputs(brand, category)
            if not validation.get("isValid"):
                raise ValidationFailed(str(validation.get("suggestions") or ""))
            aggregate.validation = validation
            yield streaming.validation_completed(validation)

            stages = build_stages(brand, category)
            for index, stage in enumerate(stages):
                current_stage = stage.key
                yield streaming.progress(index + 2, f"Investigating {stage.title}...")
                yield streaming.stage_started(stage.key, stage.title, stage.query)

                hits = await serper_search.search(stage.query, credentials.serper)
                yield streaming.search_result(stage.key, serper_search.hits_to_dicts(hits))

                enrichment = None
                if optional["firecrawl"] and hits and firecrawl_scraper.is_scrapeable_url(hits[0].link):
                    enrichment = await firecrawl_scraper.safe_scrape(hits[0].link, credentials.firecrawl)
                    if enrichment is not None:
                        yield streaming.enrichment_result(
                            stage.key,
                            enrichment.url,
                            enrichment.title,
                            clean_content(enrichment.markdown),
                        )

                analysis = await analyst.interpret_stage(stage, hits, enrichment)
                aggregate.findings[stage.key] = StageResult(
                    stage=stage.key,
                    hits=hits,
                    enrichment=enrichment,
                    analysis=analysis,
                )
                log_service.log_investigation_step(
                    brand,
                    stage.key,
                    "completed",
                    {"results": len(hits), "enriched": enrichment is not None},
                )
                yield streaming.stage_completed(
                    stage.key,
                    results_count=len(hits),
                    enriched=enrichment is not None,
                    confidence=analysis.get("confidence"),
                )
            current_stage = None

            if optional["rapidapi"]:
                yield streaming.progress(PROFILE_STEP, ANALYZING_LINKEDIN)
                profiles: list[ProfileRecord] = []
                async for profile in self._fetch_profiles(aggregate, credentials.rapidapi):
                    profiles.append(profile)
                    yield streaming.profile_fetched(profile.profile_url, profile.full_name)

                if profiles:
                    team_analysis = await analyst.analyze_profiles(profiles, brand, category)
                    aggregate.findings[PROFILE_FINDINGS_KEY] = ProfileFindings(
                        profiles=profiles,
                        analysis=team_analysis,
                    )
                else:
                    log_service.logger.info("No LinkedIn profiles retrieved from search results")

            yield streaming.progress(SYNTHESIS_STEP, GENERATING_REPORT)
            yield streaming.synthesis_started(len(aggregate.findings))
            aggregate.final_report = await analyst.synthesize(
                aggregate.findings_to_dict(),
                brand,
                category,
            )
            aggregate.completed_at = datetime.now(timezone.utc).isoformat()
        except InvestigationError as e:
            if e.stage is None and current_stage is not None:
                e.stage = current_stage
            e.findings = aggregate.findings_to_dict()
            log_service.log_investigation_step(brand, e.stage or "investigation", "failed", e.to_dict())
            raise

    async def _fetch_profiles(
        self,
        aggregate: InvestigationAggregate,
        api_key: str,
    ) -> AsyncGenerator[ProfileRecord, None]:
        """Sequential lookups; a failed identifier is logged and skipped."""
        urls = linkedin_profile.unique_profile_urls(
            aggregate.stage_results(),
            self.max_linkedin_profiles,
        )
        log_service.logger.debug(f"LinkedIn profiles to fetch: {urls}")
        for url in urls:
            try:
                yield await linkedin_profile.fetch_profile(url, api_key)
            except (InvestigationError, ValueError) as e:
                log_service.logger.warning(f"Failed to fetch LinkedIn profile {url}: {e}")

    async def run(
        self,
        brand_name: str,
        product_category: str,
        credentials: Credentials,
        *,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> InvestigationAggregate:
        """Run the investigation and return the completed aggregate.

        Raises the originating InvestigationError on abort; no partial
        aggregate is returned.
        """
        try:
            aggregate = self._new_aggregate(brand_name, product_category, credentials)
            async for event in self._pipeline(aggregate, credentials):
                if event.event == EventType.PROGRESS:
                    await _notify(on_progress, event.data["step"], event.data["text"])
        except InvestigationError as e:
            await _notify(on_error, e.kind, e.message)
            raise

        await _notify(on_complete, aggregate)
        return aggregate

    async def investigate(
        self,
        brand_name: str,
        product_category: str,
        credentials: Credentials,
    ) -> AsyncGenerator[SSEEvent, None]:
        """Stream the investigation as SSE events, ending in complete or error."""
        t0 = time.monotonic()
        try:
            aggregate = self._new_aggregate(brand_name, product_category, credentials)
            async for event in self._pipeline(aggregate, credentials):
                yield event
        except InvestigationError as e:
            yield streaming.error(e.kind, e.message, e.stage)
            return

        runtime_ms = int((time.monotonic() - t0) * 1000)
        log_service.log_event(
            event_type="investigation_complete",
            message="Investigation complete",
            brand_name=aggregate.brand_name,
            runtime_ms=runtime_ms,
        )
        yield streaming.investigation_complete(aggregate.to_dict(), runtime_ms=runtime_ms)
